import pytest

from kinship.calculator.graph import Person
from kinship.calculator.labels import (
    collateral_label,
    cousin_label,
    describe_relationship,
    lineage_label,
    ordinal,
    relationship_label,
)
from kinship.calculator.result import NO_RELATIONSHIP, Kinship, RelationshipResult


@pytest.mark.parametrize(
    "n, word",
    [(1, "first"), (2, "second"), (3, "third"), (10, "tenth"), (11, "11th"), (12, "12th"), (21, "21th")],
)
def test_ordinal(n, word):
    assert ordinal(n) == word


def test_lineage_label():
    assert lineage_label(1, ancestor=True) == "parent"
    assert lineage_label(1, ancestor=False) == "child"
    assert lineage_label(2, ancestor=True) == "grandparent"
    assert lineage_label(3, ancestor=False) == "great-grandchild"
    assert lineage_label(6, ancestor=True) == "great-great-great-great-grandparent"


def test_collateral_label():
    assert collateral_label(1, elder=True) == "aunt/uncle"
    assert collateral_label(2, elder=False) == "great-niece/nephew"
    assert collateral_label(4, elder=True) == "great-great-great-aunt/uncle"


def test_cousin_label():
    assert cousin_label(1, 0) == "first cousin"
    assert cousin_label(3, 1) == "third cousin 1× removed"
    assert cousin_label(11, 2) == "11th cousin 2× removed"


def test_in_law_suffix():
    cousin = RelationshipResult(kind=Kinship.COUSIN, cousin_degree=2, in_law=True)
    assert relationship_label(cousin) == "second cousin-in-law"
    assert relationship_label(RelationshipResult(kind=Kinship.PARENT, generations=1, in_law=True)) == "parent-in-law"


def test_sentinels():
    assert relationship_label(RelationshipResult(kind=Kinship.SELF)) == "self"
    assert relationship_label(NO_RELATIONSHIP) == "no relationship"


def test_describe_relationship():
    ann = Person(id="a", preferred_name="Ann")
    bob = Person(id="b", preferred_name="Bob")
    cousin = RelationshipResult(kind=Kinship.COUSIN, path=("a", "g", "b"), cousin_degree=1)

    assert describe_relationship(ann, bob, cousin) == "Ann is the first cousin of Bob"
    assert describe_relationship(ann, bob, NO_RELATIONSHIP) == "Ann and Bob are not directly related"
    assert describe_relationship(ann, ann, RelationshipResult(kind=Kinship.SELF, path=("a",))) == "Same person"


def test_describe_falls_back_to_ids():
    result = RelationshipResult(kind=Kinship.SPOUSE, path=("a", "b"), distance=1)
    assert describe_relationship(None, None, result) == "a is the spouse of b"
    assert describe_relationship("Ann", None, result) == "Ann is the spouse of b"
