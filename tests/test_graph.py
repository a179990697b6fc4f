import random

import pytest

from kinship.calculator.graph import (
    EdgeKind,
    RelationshipEdge,
    build_family_graph,
    classify_relationship_type,
)
from tests.family_builders import parent, people, sibling, spouse


@pytest.mark.parametrize(
    "raw, kind",
    [
        ("parent_child", EdgeKind.PARENT_CHILD),
        ("adoptive_parent", EdgeKind.PARENT_CHILD),
        ("Step-Parent", EdgeKind.PARENT_CHILD),
        ("foster parent", EdgeKind.PARENT_CHILD),
        ("guardian", EdgeKind.PARENT_CHILD),
        ("parent_of", EdgeKind.PARENT_CHILD),
        ("spouse", EdgeKind.SPOUSE),
        ("partner", EdgeKind.SPOUSE),
        ("married", EdgeKind.SPOUSE),
        (" SIBLING ", EdgeKind.SIBLING),
        ("other", EdgeKind.UNKNOWN),
        ("", EdgeKind.UNKNOWN),
        (None, EdgeKind.UNKNOWN),
    ],
)
def test_classify_relationship_type(raw, kind):
    assert classify_relationship_type(raw) is kind


def test_indices_mirror_each_other(cousin_edges):
    graph = build_family_graph(cousin_edges)

    for parent_id, kids in graph.children.items():
        for kid in kids:
            assert parent_id in graph.parents_of(kid)
    for kid, parent_ids in graph.parents.items():
        for parent_id in parent_ids:
            assert kid in graph.children_of(parent_id)
    for a, others in graph.spouses.items():
        for b in others:
            assert a in graph.spouses_of(b)

    assert graph.parents_of("C1") == ("G", "H")
    assert graph.children_of("G") == ("C1", "C2")
    assert graph.spouses_of("C1") == ("W",)
    assert graph.siblings_of("C1") == ()


def test_first_id_is_the_parent():
    graph = build_family_graph([parent("Mum", "Kid", "adoptive_parent")])
    assert graph.parents_of("Kid") == ("Mum",)
    assert graph.parents_of("Mum") == ()


def test_sibling_edges_are_symmetric():
    graph = build_family_graph([sibling("A", "B")])
    assert graph.siblings_of("A") == ("B",)
    assert graph.siblings_of("B") == ("A",)


def test_unrecognised_and_self_edges_are_skipped():
    graph = build_family_graph([
        RelationshipEdge("A", "B", "other"),
        RelationshipEdge("A", "B", "godparent"),
        spouse("A", "A"),
        parent("A", "B"),
    ])
    assert graph.edge_count == 1
    assert graph.skipped_count == 3
    assert graph.spouses_of("A") == ()
    assert graph.children_of("A") == ("B",)


def test_edges_to_unknown_people_are_skipped_when_people_given():
    graph = build_family_graph([parent("A", "B"), parent("A", "ghost")], people("A", "B"))
    assert graph.children_of("A") == ("B",)
    assert graph.parents_of("ghost") == ()
    assert graph.person_ids == frozenset({"A", "B"})
    assert graph.knows("A")
    assert not graph.knows("ghost")


def test_person_ids_default_to_everyone_on_an_edge(cousin_edges):
    graph = build_family_graph(cousin_edges)
    assert graph.person_ids == frozenset({"G", "H", "C1", "C2", "X", "Y", "Z", "W"})
    assert graph.knows("anyone")


def test_duplicate_edges_collapse():
    graph = build_family_graph([parent("A", "B"), parent("A", "B"), spouse("A", "C"), spouse("C", "A")])
    assert graph.children_of("A") == ("B",)
    assert graph.spouses_of("A") == ("C",)
    assert graph.spouses_of("C") == ("A",)


def test_build_is_order_independent(cousin_edges):
    shuffled = list(cousin_edges)
    random.Random(7).shuffle(shuffled)

    assert build_family_graph(cousin_edges) == build_family_graph(shuffled)
    assert build_family_graph(cousin_edges) == build_family_graph(list(reversed(cousin_edges)))


def test_indices_are_read_only(cousin_edges):
    graph = build_family_graph(cousin_edges)
    with pytest.raises(TypeError):
        graph.parents["X"] = ("nobody",)
