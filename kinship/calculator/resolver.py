"""Relationship resolver — how is person1 related to person2?

Takes a FamilyGraph (plus an optional people table) and answers pairwise or
one-against-everyone queries. Every answer reads "person1 is the <label> of
person2".

Resolution order, first match wins:

1. same id                      -> self
2. spouse / sibling edge        -> spouse, sibling
3. parent edge either way       -> parent, child
4. one is the other's ancestor  -> ancestor, descendant (grandparent, ...)
5. nearest common ancestor      -> sibling, aunt/uncle, niece/nephew, cousin
6. one spouse hop on either side -> any of the above, as an in-law

Unknown ids, unrecognised edges and cyclic parentage all end in a result,
never an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from kinship.calculator.ancestors import find_ancestors, nearest_common_ancestor
from kinship.calculator.graph import FamilyGraph, Person
from kinship.calculator.result import NO_RELATIONSHIP, Kinship, RelationshipResult

logger = logging.getLogger("kinship.calculator.resolver")


def _people_table(
    people: Mapping[str, Person] | Iterable[Person] | None,
) -> dict[str, Person] | None:
    if people is None:
        return None
    if isinstance(people, Mapping):
        return dict(people)
    return {p.id: p for p in people}


class RelationshipCalculator:
    """Resolves relationships against one graph snapshot.

    Ancestor maps are cached per person for the life of the calculator, so a
    sweep from one origin walks the origin's ancestry once. The graph is
    never modified; rebuild it (and make a new calculator) when edges change.
    """

    def __init__(
        self,
        graph: FamilyGraph,
        people: Mapping[str, Person] | Iterable[Person] | None = None,
    ):
        self._graph = graph
        self._people = _people_table(people)
        self._ancestors: dict[str, dict[str, int]] = {}

    @property
    def graph(self) -> FamilyGraph:
        return self._graph

    def person(self, pid: str) -> Person | None:
        if self._people is None:
            return None
        return self._people.get(pid)

    def _known(self, pid: str) -> bool:
        if self._people is not None:
            return pid in self._people
        return self._graph.knows(pid)

    def ancestors_of(self, pid: str) -> dict[str, int]:
        cached = self._ancestors.get(pid)
        if cached is None:
            cached = find_ancestors(self._graph, pid)
            self._ancestors[pid] = cached
        return cached

    # -- public API -----------------------------------------------------------

    def relationship(self, person1_id: str, person2_id: str) -> RelationshipResult:
        """Resolve how person1 is related to person2."""
        if not self._known(person1_id) or not self._known(person2_id):
            logger.debug("Unknown person in query %s -> %s", person1_id, person2_id)
            return NO_RELATIONSHIP
        result = self._resolve(person1_id, person2_id, allow_in_law=True)
        logger.debug("%s -> %s: %s", person1_id, person2_id, result.label)
        return result

    def relationships_from(
        self, origin_id: str, related_only: bool = False
    ) -> dict[str, RelationshipResult]:
        """Resolve origin against every other known person.

        Unrelated people map to a NONE result unless ``related_only`` is set.
        """
        if self._people is not None:
            others = sorted(self._people)
        else:
            others = sorted(self._graph.person_ids)

        results: dict[str, RelationshipResult] = {}
        for other_id in others:
            if other_id == origin_id:
                continue
            result = self.relationship(origin_id, other_id)
            if related_only and not result.found:
                continue
            results[other_id] = result

        logger.info(
            "Resolved %d relationships from %s (%d related)",
            len(results), origin_id, sum(1 for r in results.values() if r.found),
        )
        return results

    # -- resolution -----------------------------------------------------------

    def _resolve(self, p1: str, p2: str, allow_in_law: bool) -> RelationshipResult:
        if p1 == p2:
            return RelationshipResult(kind=Kinship.SELF, path=(p1,))

        direct = self._direct(p1, p2)
        if direct is not None:
            return direct

        blood = self._blood(p1, p2)
        if blood is not None:
            return blood

        # Nested calls never hop again, so at most one spouse edge is used.
        if allow_in_law:
            return self._in_law(p1, p2)
        return NO_RELATIONSHIP

    def _direct(self, p1: str, p2: str) -> RelationshipResult | None:
        g = self._graph
        path = (p1, p2)
        if p2 in g.spouses_of(p1):
            return RelationshipResult(kind=Kinship.SPOUSE, path=path, distance=1)
        if p2 in g.siblings_of(p1):
            return RelationshipResult(kind=Kinship.SIBLING, path=path, distance=1)
        if p2 in g.parents_of(p1):
            return RelationshipResult(
                kind=Kinship.CHILD, path=path, distance=1, generations=1, generation_offset=-1
            )
        if p2 in g.children_of(p1):
            return RelationshipResult(
                kind=Kinship.PARENT, path=path, distance=1, generations=1, generation_offset=1
            )
        return None

    def _blood(self, p1: str, p2: str) -> RelationshipResult | None:
        ancestors1 = self.ancestors_of(p1)
        ancestors2 = self.ancestors_of(p2)

        if p2 in ancestors1:
            n = ancestors1[p2]
            return RelationshipResult(
                kind=Kinship.DESCENDANT, path=(p1, p2), distance=n,
                generations=n, generation_offset=-n,
            )
        if p1 in ancestors2:
            n = ancestors2[p1]
            return RelationshipResult(
                kind=Kinship.ANCESTOR, path=(p1, p2), distance=n,
                generations=n, generation_offset=n,
            )

        nearest = nearest_common_ancestor(ancestors1, ancestors2)
        if nearest is None:
            return None
        ancestor_id, g1, g2 = nearest
        if self._people is not None and logger.isEnabledFor(logging.DEBUG):
            ancestor = self.person(ancestor_id)
            logger.debug(
                "Nearest common ancestor of %s and %s: %s (%d, %d)",
                p1, p2, ancestor.preferred_name if ancestor else "unknown", g1, g2,
            )

        removal = abs(g1 - g2)
        common = dict(
            path=(p1, ancestor_id, p2),
            distance=g1 + g2,
            removal=removal,
            generation_offset=g2 - g1,
            common_ancestor_id=ancestor_id,
        )
        if min(g1, g2) == 1:
            if removal == 0:
                # Shared parent, even if nobody recorded a sibling edge. Same
                # "sibling" label as an edge; result.inferred tells them apart.
                return RelationshipResult(kind=Kinship.SIBLING, **common)
            kind = Kinship.AUNT_UNCLE if g1 < g2 else Kinship.NIECE_NEPHEW
            return RelationshipResult(kind=kind, generations=removal, **common)

        return RelationshipResult(
            kind=Kinship.COUSIN, cousin_degree=min(g1, g2) - 1, **common
        )

    def _in_law(self, p1: str, p2: str) -> RelationshipResult:
        g = self._graph

        # p1's spouse is blood kin of p2
        for spouse_id in g.spouses_of(p1):
            inner = self._resolve(spouse_id, p2, allow_in_law=False)
            if inner.found and inner.kind is not Kinship.SELF:
                return inner.as_in_law((p1, spouse_id) + inner.path[1:])

        # p1 is blood kin of p2's spouse
        for spouse_id in g.spouses_of(p2):
            inner = self._resolve(p1, spouse_id, allow_in_law=False)
            if inner.found and inner.kind is not Kinship.SELF:
                return inner.as_in_law(inner.path + (p2,))

        return NO_RELATIONSHIP


# ---------------------------------------------------------------------------
# Convenience wrappers
# ---------------------------------------------------------------------------

def calculate_relationship(
    person1_id: str,
    person2_id: str,
    graph: FamilyGraph,
    people: Mapping[str, Person] | Iterable[Person] | None = None,
) -> RelationshipResult:
    """One-off query; build a RelationshipCalculator for repeated ones."""
    return RelationshipCalculator(graph, people).relationship(person1_id, person2_id)


def calculate_all_relationships(
    origin_id: str,
    graph: FamilyGraph,
    people: Mapping[str, Person] | Iterable[Person] | None = None,
    related_only: bool = False,
) -> dict[str, RelationshipResult]:
    return RelationshipCalculator(graph, people).relationships_from(origin_id, related_only)
