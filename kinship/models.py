"""Pydantic models for kinship API request/response shapes."""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Graph snapshot (input)
# ---------------------------------------------------------------------------

class PersonIn(BaseModel):
    id: str
    preferred_name: str


class RelationshipIn(BaseModel):
    person_a_id: str  # the parent for parent-child types
    person_b_id: str
    relationship_type: str  # parent_child, spouse, sibling, adoptive_parent, ...


class SnapshotIn(BaseModel):
    people: list[PersonIn] = Field(default_factory=list)
    relationships: list[RelationshipIn] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

class RelationshipQueryIn(SnapshotIn):
    person1_id: str
    person2_id: str


class AllRelationshipsQueryIn(SnapshotIn):
    origin_id: str
    related_only: bool = False


class RelationshipOut(BaseModel):
    kind: str  # self, spouse, sibling, parent, child, ancestor, ..., none
    label: str  # e.g. "second cousin 1× removed", "sibling-in-law"
    description: str
    path: list[str]
    distance: int
    generations: int
    cousin_degree: int
    removal: int
    generation_offset: int
    in_law: bool
    inferred: bool = False  # sibling inferred from a shared parent
    common_ancestor_id: str | None = None
    common_ancestor_name: str | None = None


class AllRelationshipsOut(BaseModel):
    origin_id: str
    relationships: dict[str, RelationshipOut]
    total: int


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

class ValidationOut(BaseModel):
    warnings: list[str]
    people: int
    relationships: int
