"""Ancestor search over the parent index."""

from __future__ import annotations

from collections import deque

from kinship.calculator.graph import FamilyGraph


def find_ancestors(graph: FamilyGraph, person_id: str) -> dict[str, int]:
    """Return {ancestor_id: generation} for everyone above person_id.

    1 = parent, 2 = grandparent, and so on. Breadth-first, so each ancestor
    keeps the smallest distance it is reachable at. The visited set stops
    bad data (someone recorded as their own ancestor) from looping forever;
    the origin is never included.
    """
    ancestors: dict[str, int] = {}
    visited: set[str] = {person_id}
    queue: deque[tuple[str, int]] = deque([(person_id, 0)])

    while queue:
        pid, generation = queue.popleft()
        for parent_id in graph.parents_of(pid):
            if parent_id in visited:
                continue
            visited.add(parent_id)
            ancestors[parent_id] = generation + 1
            queue.append((parent_id, generation + 1))

    return ancestors


def common_ancestors(
    ancestors1: dict[str, int], ancestors2: dict[str, int]
) -> dict[str, tuple[int, int]]:
    """Ancestors shared by both maps, with the distance from each side."""
    return {
        aid: (g1, ancestors2[aid])
        for aid, g1 in ancestors1.items()
        if aid in ancestors2
    }


def nearest_common_ancestor(
    ancestors1: dict[str, int], ancestors2: dict[str, int]
) -> tuple[str, int, int] | None:
    """Pick the shared ancestor with the smallest combined distance.

    Couples are usually equidistant; ties go to the lowest id so repeated
    queries always name the same ancestor.
    """
    shared = common_ancestors(ancestors1, ancestors2)
    if not shared:
        return None
    aid = min(shared, key=lambda a: (shared[a][0] + shared[a][1], a))
    g1, g2 = shared[aid]
    return aid, g1, g2
