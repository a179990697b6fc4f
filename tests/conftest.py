from __future__ import annotations

import pytest

from kinship.calculator.graph import Person, RelationshipEdge, build_family_graph
from kinship.calculator.resolver import RelationshipCalculator
from tests.family_builders import COUSIN_PEOPLE, parent, people, spouse


@pytest.fixture
def cousin_edges() -> list[RelationshipEdge]:
    return [
        spouse("G", "H"),
        parent("G", "C1"),
        parent("H", "C1"),
        parent("G", "C2"),
        parent("H", "C2"),
        parent("C1", "X"),
        parent("C2", "Y"),
        parent("X", "Z"),
        spouse("C1", "W"),
    ]


@pytest.fixture
def cousin_people() -> list[Person]:
    return people(*COUSIN_PEOPLE)


@pytest.fixture
def cousin_calc(cousin_edges, cousin_people) -> RelationshipCalculator:
    graph = build_family_graph(cousin_edges, cousin_people)
    return RelationshipCalculator(graph, cousin_people)
