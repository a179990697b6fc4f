"""Kinship API endpoints.

Stateless: every request carries its own people + relationships snapshot,
which is turned into a fresh FamilyGraph for that request only. Handlers are
plain functions: the work is CPU-bound, so FastAPI runs them in its threadpool
instead of on the event loop.
"""

from __future__ import annotations

import logging
import os
from threading import Lock

from fastapi import APIRouter, HTTPException

from kinship.calculator.graph import FamilyGraph, Person, RelationshipEdge, build_family_graph
from kinship.calculator.labels import describe_relationship
from kinship.calculator.resolver import RelationshipCalculator
from kinship.calculator.result import RelationshipResult
from kinship.calculator.validation import validate_snapshot
from kinship.models import (
    AllRelationshipsOut,
    AllRelationshipsQueryIn,
    RelationshipOut,
    RelationshipQueryIn,
    SnapshotIn,
    ValidationOut,
)

logger = logging.getLogger("kinship.calculator.routes")

MAX_PEOPLE = int(os.environ.get("KIN_MAX_PEOPLE", "5000"))
MAX_RELATIONSHIPS = int(os.environ.get("KIN_MAX_RELATIONSHIPS", "20000"))

router = APIRouter(prefix="/api/v1/kinship", tags=["kinship"])

# Served-query counters, read by /metrics
query_stats: dict[str, int] = {"pair_queries": 0, "sweeps": 0, "validations": 0}
_stats_lock = Lock()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _count(key: str) -> None:
    with _stats_lock:
        query_stats[key] += 1


def _check_size(body: SnapshotIn) -> None:
    if len(body.people) > MAX_PEOPLE:
        raise HTTPException(413, f"Too many people: {len(body.people)} > {MAX_PEOPLE}")
    if len(body.relationships) > MAX_RELATIONSHIPS:
        raise HTTPException(
            413, f"Too many relationships: {len(body.relationships)} > {MAX_RELATIONSHIPS}"
        )


def _people(body: SnapshotIn) -> list[Person]:
    return [Person(id=p.id, preferred_name=p.preferred_name) for p in body.people]


def _edges(body: SnapshotIn) -> list[RelationshipEdge]:
    return [
        RelationshipEdge(
            person_a_id=r.person_a_id,
            person_b_id=r.person_b_id,
            relationship_type=r.relationship_type,
        )
        for r in body.relationships
    ]


def _calculator(body: SnapshotIn) -> RelationshipCalculator:
    """Build the graph for one request.

    An empty people list means "no existence check": every id named by an
    edge counts as a person.
    """
    _check_size(body)
    people = _people(body)
    graph: FamilyGraph = build_family_graph(_edges(body), people or None)
    return RelationshipCalculator(graph, people or None)


def _rel_out(
    calc: RelationshipCalculator, person1_id: str, person2_id: str, result: RelationshipResult
) -> RelationshipOut:
    ancestor = calc.person(result.common_ancestor_id) if result.common_ancestor_id else None
    return RelationshipOut(
        kind=result.kind.value,
        label=result.label,
        description=describe_relationship(
            calc.person(person1_id) or person1_id,
            calc.person(person2_id) or person2_id,
            result,
        ),
        path=list(result.path),
        distance=result.distance,
        generations=result.generations,
        cousin_degree=result.cousin_degree,
        removal=result.removal,
        generation_offset=result.generation_offset,
        in_law=result.in_law,
        inferred=result.inferred,
        common_ancestor_id=result.common_ancestor_id,
        common_ancestor_name=ancestor.preferred_name if ancestor else None,
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

@router.post("/relationship")
def find_relationship(body: RelationshipQueryIn) -> RelationshipOut:
    """How is person1 related to person2?"""
    calc = _calculator(body)
    result = calc.relationship(body.person1_id, body.person2_id)
    _count("pair_queries")
    return _rel_out(calc, body.person1_id, body.person2_id, result)


@router.post("/relationships")
def find_all_relationships(body: AllRelationshipsQueryIn) -> AllRelationshipsOut:
    """Relationship of origin to everyone else in the snapshot."""
    calc = _calculator(body)
    results = calc.relationships_from(body.origin_id, related_only=body.related_only)
    _count("sweeps")
    return AllRelationshipsOut(
        origin_id=body.origin_id,
        relationships={
            other_id: _rel_out(calc, body.origin_id, other_id, result)
            for other_id, result in results.items()
        },
        total=len(results),
    )


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

@router.post("/validate")
def validate(body: SnapshotIn) -> ValidationOut:
    """Report data problems the calculator silently tolerates."""
    _check_size(body)
    warnings = validate_snapshot(_edges(body), _people(body) or None)
    _count("validations")
    if warnings:
        logger.info("Snapshot validation produced %d warnings", len(warnings))
    return ValidationOut(
        warnings=warnings,
        people=len(body.people),
        relationships=len(body.relationships),
    )
