"""Snapshot diagnostics for relationship data.

The graph builder quietly skips rows it cannot use; this reports them so the
people maintaining the tree can fix their data. Checks:
- Self-referential and unrecognised edges
- Edges naming people who are not in the snapshot
- Duplicate edges
- More than two recorded parents
- Cycles in parent-child relationships

Returns a list of warning messages; never raises.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

import networkx as nx

from kinship.calculator.graph import (
    EdgeKind,
    Person,
    RelationshipEdge,
    classify_relationship_type,
)


def _edge_key(kind: EdgeKind, a: str, b: str) -> tuple:
    # parent edges are ordered, the others are not
    if kind is EdgeKind.PARENT_CHILD:
        return (kind, a, b)
    return (kind, *sorted((a, b)))


def validate_snapshot(
    relationships: Iterable[RelationshipEdge],
    people: Iterable[Person] | None = None,
) -> list[str]:
    warnings: list[str] = []
    names: dict[str, str] | None = None
    if people is not None:
        names = {p.id: p.preferred_name for p in people}

    def _label(pid: str) -> str:
        if names and pid in names:
            return f"{names[pid]} ({pid})"
        return pid

    seen: Counter = Counter()
    parent_graph = nx.DiGraph()
    parents: dict[str, set[str]] = {}

    for r in relationships:
        a, b = r.person_a_id, r.person_b_id
        kind = classify_relationship_type(r.relationship_type)

        if kind is EdgeKind.UNKNOWN:
            warnings.append(
                f"Ignored: unrecognised relationship type '{r.relationship_type}' "
                f"between {_label(a)} and {_label(b)}"
            )
            continue
        if a == b:
            warnings.append(f"Ignored: {_label(a)} has a {kind.value} edge to themselves")
            continue
        if names is not None:
            missing = [pid for pid in (a, b) if pid not in names]
            if missing:
                warnings.append(
                    f"Ignored: {kind.value} edge names unknown person(s) {', '.join(missing)}"
                )
                continue

        key = _edge_key(kind, a, b)
        seen[key] += 1
        if seen[key] == 2:
            warnings.append(f"Duplicate {kind.value} edge between {_label(a)} and {_label(b)}")

        if kind is EdgeKind.PARENT_CHILD:
            parent_graph.add_edge(a, b)
            parents.setdefault(b, set()).add(a)

    for child, child_parents in sorted(parents.items()):
        if len(child_parents) > 2:
            warnings.append(
                f"Suspicious: {_label(child)} has {len(child_parents)} recorded parents"
            )

    # Check for cycles
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [_label(edge[0]) for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    return warnings
