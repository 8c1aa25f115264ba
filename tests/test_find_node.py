from family_tree.builder import build_forest, find_node


def test_find_primary_member(sample_records):
    forest = build_forest(sample_records)

    node = find_node(forest, "c2")

    assert node is not None
    assert node.id == "c2"


def test_find_by_spouse_returns_couple(sample_records):
    forest = build_forest(sample_records)

    node = find_node(forest, "s1")

    assert node is not None
    assert node.id == "c1"
    assert node.spouse.id == "s1"
    assert [c.id for c in node.children] == ["gc2", "gc1"]


def test_find_root_spouse(sample_records):
    forest = build_forest(sample_records)

    assert find_node(forest, "m1") is forest[0]


def test_missing_id_returns_none(sample_records):
    forest = build_forest(sample_records)

    assert find_node(forest, "nobody") is None


def test_empty_forest():
    assert find_node([], "a") is None
    assert build_forest([]) == []
