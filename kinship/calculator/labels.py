"""Label formatter — turns a RelationshipResult into display text.

Pure functions, no side effects. Labels follow the usual genealogy wording:

    2 generations up     -> "grandparent"
    4 generations up     -> "great-great-grandparent"
    parent's sibling     -> "aunt/uncle"
    grandparent's sibling -> "great-aunt/uncle"
    cousins, uneven      -> "second cousin 2× removed"
"""

from __future__ import annotations

from kinship.calculator.graph import Person
from kinship.calculator.result import Kinship, RelationshipResult

_ORDINALS = (
    "", "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
)

_DIRECT_LABELS = {
    Kinship.SPOUSE: "spouse",
    Kinship.SIBLING: "sibling",
    Kinship.PARENT: "parent",
    Kinship.CHILD: "child",
}


def ordinal(n: int) -> str:
    """'first' .. 'tenth', then '11th', '12th', ..."""
    if 1 <= n < len(_ORDINALS):
        return _ORDINALS[n]
    return f"{n}th"


def _greats(count: int) -> str:
    return "great-" * max(count, 0)


def lineage_label(generations: int, ancestor: bool) -> str:
    """Direct line label: parent, grandparent, great-grandparent, ..."""
    if generations <= 1:
        return "parent" if ancestor else "child"
    base = "grandparent" if ancestor else "grandchild"
    return f"{_greats(generations - 2)}{base}"


def collateral_label(removal: int, elder: bool) -> str:
    """Sibling-line label; removal 1 is aunt/uncle or niece/nephew."""
    base = "aunt/uncle" if elder else "niece/nephew"
    return f"{_greats(removal - 1)}{base}"


def cousin_label(degree: int, removal: int) -> str:
    if removal == 0:
        return f"{ordinal(degree)} cousin"
    return f"{ordinal(degree)} cousin {removal}× removed"


def kinship_label(result: RelationshipResult) -> str:
    """Label for the blood (or direct) part of a result, without '-in-law'."""
    kind = result.kind
    if kind in _DIRECT_LABELS:
        return _DIRECT_LABELS[kind]
    if kind is Kinship.ANCESTOR:
        return lineage_label(result.generations, ancestor=True)
    if kind is Kinship.DESCENDANT:
        return lineage_label(result.generations, ancestor=False)
    if kind is Kinship.AUNT_UNCLE:
        return collateral_label(result.generations, elder=True)
    if kind is Kinship.NIECE_NEPHEW:
        return collateral_label(result.generations, elder=False)
    if kind is Kinship.COUSIN:
        return cousin_label(result.cousin_degree, result.removal)
    if kind is Kinship.SELF:
        return "self"
    return "no relationship"


def relationship_label(result: RelationshipResult) -> str:
    label = kinship_label(result)
    if result.in_law and result.kind not in (Kinship.SELF, Kinship.NONE):
        return f"{label}-in-law"
    return label


def _name(person: Person | str | None, fallback: str = "unknown") -> str:
    if person is None:
        return fallback
    if isinstance(person, Person):
        return person.preferred_name or person.id
    return person


def describe_relationship(
    person1: Person | str | None,
    person2: Person | str | None,
    result: RelationshipResult,
) -> str:
    """One sentence for the UI, e.g. 'Ann is the first cousin of Bob'."""
    a = _name(person1, result.path[0] if result.path else "unknown")
    b = _name(person2, result.path[-1] if result.path else "unknown")
    if result.kind is Kinship.NONE:
        return f"{a} and {b} are not directly related"
    if result.kind is Kinship.SELF:
        return "Same person"
    return f"{a} is the {relationship_label(result)} of {b}"
