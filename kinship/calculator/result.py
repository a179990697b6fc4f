"""Relationship descriptors returned by the resolver."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Kinship(str, Enum):
    SELF = "self"
    SPOUSE = "spouse"
    SIBLING = "sibling"
    PARENT = "parent"
    CHILD = "child"
    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    AUNT_UNCLE = "aunt_uncle"
    NIECE_NEPHEW = "niece_nephew"
    COUSIN = "cousin"
    NONE = "none"


@dataclass(frozen=True)
class RelationshipResult:
    """How person1 is related to person2, read as "person1 is the <label> of person2"."""

    kind: Kinship
    path: tuple[str, ...] = ()
    distance: int = 0  # edge hops: 1 for direct, g1+g2 through an ancestor
    generations: int = 0  # lineage depth, or removal for aunt/niece lines
    cousin_degree: int = 0
    removal: int = 0
    generation_offset: int = 0  # >0 when person1 is the older generation
    in_law: bool = False
    common_ancestor_id: str | None = None

    @property
    def found(self) -> bool:
        return self.kind is not Kinship.NONE

    @property
    def inferred(self) -> bool:
        """Siblings found through a shared parent rather than a sibling edge."""
        return self.kind is Kinship.SIBLING and self.common_ancestor_id is not None

    @property
    def label(self) -> str:
        from kinship.calculator.labels import relationship_label

        return relationship_label(self)

    def as_in_law(self, path: tuple[str, ...]) -> RelationshipResult:
        """Same relationship, reached through one extra spouse edge."""
        return replace(self, path=path, distance=self.distance + 1, in_law=True)

    @classmethod
    def none(cls) -> RelationshipResult:
        return cls(kind=Kinship.NONE)


NO_RELATIONSHIP = RelationshipResult.none()
