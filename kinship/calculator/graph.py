"""Family graph — adjacency indices built from a flat relationship list.

People and relationship rows come from whatever stores the family tree; this
module only turns them into four lookup tables (parents, children, spouses,
siblings) that the resolver walks. Rows it does not understand are skipped,
never rejected, because user-entered genealogy is rarely clean.

No DB, no I/O — pure functions on in-memory data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

logger = logging.getLogger("kinship.calculator.graph")


@dataclass(frozen=True)
class Person:
    id: str
    preferred_name: str


@dataclass(frozen=True)
class RelationshipEdge:
    person_a_id: str
    person_b_id: str
    relationship_type: str  # parent_child, spouse, sibling, adoptive_parent, ...


class EdgeKind(str, Enum):
    """What an edge means for kinship purposes."""

    PARENT_CHILD = "parent_child"
    SPOUSE = "spouse"
    SIBLING = "sibling"
    UNKNOWN = "unknown"


_PARENT_TYPES = frozenset({
    "parent_child",
    "adoptive_parent",
    "step_parent",
    "foster_parent",
    "guardian",
    "parent_of",
})
_SPOUSE_TYPES = frozenset({"spouse", "partner", "married", "divorced"})
_SIBLING_TYPES = frozenset({"sibling"})


def classify_relationship_type(relationship_type: str | None) -> EdgeKind:
    """Map a stored relationship type onto an EdgeKind.

    'Adoptive-Parent', 'step parent' and 'guardian' all count as parent-child;
    anything not recognised becomes UNKNOWN.
    """
    if not relationship_type:
        return EdgeKind.UNKNOWN
    key = relationship_type.strip().lower().replace("-", "_").replace(" ", "_")
    if key in _PARENT_TYPES:
        return EdgeKind.PARENT_CHILD
    if key in _SPOUSE_TYPES:
        return EdgeKind.SPOUSE
    if key in _SIBLING_TYPES:
        return EdgeKind.SIBLING
    return EdgeKind.UNKNOWN


def _freeze(index: dict[str, set[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({k: tuple(sorted(v)) for k, v in sorted(index.items())})


class FamilyGraph:
    """Read-only snapshot of who is whose parent, child, spouse and sibling.

    Every index value is a sorted tuple of unique ids, so the same set of
    edges produces identical indices whatever order they arrive in.
    """

    def __init__(
        self,
        relationships: Iterable[RelationshipEdge],
        person_ids: Iterable[str] | None = None,
    ):
        self._person_ids: frozenset[str] | None = (
            frozenset(person_ids) if person_ids is not None else None
        )

        parents: dict[str, set[str]] = {}  # child_id -> {parent_ids}
        children: dict[str, set[str]] = {}  # parent_id -> {child_ids}
        spouses: dict[str, set[str]] = {}  # person_id -> {spouse_ids}
        siblings: dict[str, set[str]] = {}  # person_id -> {sibling_ids}

        used = skipped = 0
        for r in relationships:
            a, b = r.person_a_id, r.person_b_id
            kind = classify_relationship_type(r.relationship_type)
            if kind is EdgeKind.UNKNOWN:
                logger.debug("Skipping %s edge %s -> %s", r.relationship_type, a, b)
                skipped += 1
                continue
            if a == b:
                logger.debug("Skipping self-referential %s edge on %s", kind.value, a)
                skipped += 1
                continue
            if self._person_ids is not None and (
                a not in self._person_ids or b not in self._person_ids
            ):
                logger.debug("Skipping %s edge %s -> %s: unknown person", kind.value, a, b)
                skipped += 1
                continue

            if kind is EdgeKind.PARENT_CHILD:
                # person_a is the parent
                children.setdefault(a, set()).add(b)
                parents.setdefault(b, set()).add(a)
            elif kind is EdgeKind.SPOUSE:
                spouses.setdefault(a, set()).add(b)
                spouses.setdefault(b, set()).add(a)
            else:
                siblings.setdefault(a, set()).add(b)
                siblings.setdefault(b, set()).add(a)
            used += 1

        self._parents = _freeze(parents)
        self._children = _freeze(children)
        self._spouses = _freeze(spouses)
        self._siblings = _freeze(siblings)
        self.edge_count = used
        self.skipped_count = skipped

        logger.info(
            "Built family graph: %d people, %d edges used, %d skipped",
            len(self.person_ids), used, skipped,
        )

    # -- lookups --------------------------------------------------------------

    def parents_of(self, pid: str) -> tuple[str, ...]:
        return self._parents.get(pid, ())

    def children_of(self, pid: str) -> tuple[str, ...]:
        return self._children.get(pid, ())

    def spouses_of(self, pid: str) -> tuple[str, ...]:
        return self._spouses.get(pid, ())

    def siblings_of(self, pid: str) -> tuple[str, ...]:
        return self._siblings.get(pid, ())

    @property
    def parents(self) -> Mapping[str, tuple[str, ...]]:
        return self._parents

    @property
    def children(self) -> Mapping[str, tuple[str, ...]]:
        return self._children

    @property
    def spouses(self) -> Mapping[str, tuple[str, ...]]:
        return self._spouses

    @property
    def siblings(self) -> Mapping[str, tuple[str, ...]]:
        return self._siblings

    @property
    def person_ids(self) -> frozenset[str]:
        """Known people: the supplied id list, or everyone named by an edge."""
        if self._person_ids is not None:
            return self._person_ids
        ids: set[str] = set()
        for index in (self._parents, self._children, self._spouses, self._siblings):
            ids.update(index)
        return frozenset(ids)

    def knows(self, pid: str) -> bool:
        """False only when a person list was supplied and pid is not on it."""
        return self._person_ids is None or pid in self._person_ids

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FamilyGraph):
            return NotImplemented
        return (
            self._person_ids == other._person_ids
            and dict(self._parents) == dict(other._parents)
            and dict(self._children) == dict(other._children)
            and dict(self._spouses) == dict(other._spouses)
            and dict(self._siblings) == dict(other._siblings)
        )

    __hash__ = None  # type: ignore[assignment]


def build_family_graph(
    relationships: Iterable[RelationshipEdge],
    people: Iterable[Person] | Iterable[str] | None = None,
) -> FamilyGraph:
    """Build a FamilyGraph from relationship rows.

    When ``people`` is given (Person objects or bare ids), edges naming anyone
    not on the list are ignored and lookups for unknown ids find nothing.
    """
    person_ids = None
    if people is not None:
        person_ids = [p.id if isinstance(p, Person) else p for p in people]
    return FamilyGraph(relationships, person_ids)
