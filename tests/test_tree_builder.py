# tests/test_tree_builder.py

from __future__ import annotations

from collections import Counter

from family_tree.builder import (
    TreeBuilder,
    build_forest,
    collect_member_ids,
    forest_depth,
    iter_nodes,
)
from family_tree.models import Member


def make_member(id, parent=None, spouse=None, order=0, **payload):
    return Member(
        id=id,
        first_name=payload.pop("first_name", id.upper()),
        last_name=payload.pop("last_name", "Test"),
        parent_id=parent,
        spouse_id=spouse,
        child_order=order,
        **payload,
    )


def ids(nodes):
    return [n.id for n in nodes]


def assert_no_duplicates(forest):
    counts = Counter(collect_member_ids(forest))
    dupes = [k for k, v in counts.items() if v > 1]
    assert not dupes, f"ids placed more than once: {dupes}"


def assert_reciprocal(forest):
    for node in iter_nodes(forest):
        if node.spouse is not None:
            assert node.spouse.spouse is node
            assert node.spouse.children == []
            assert node.spouse.is_spouse


# ---------------------------------------------------------------------- #
# Scenarios
# ---------------------------------------------------------------------- #

def test_mutual_root_couple_with_ordered_children() -> None:
    members = [
        make_member("a", spouse="b"),
        make_member("b", spouse="a"),
        make_member("c", parent="a", order=2),
        make_member("d", parent="a", order=1),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["a"]
    assert forest[0].spouse.id == "b"
    assert ids(forest[0].children) == ["d", "c"]


def test_parentless_spouse_of_child_is_not_a_root() -> None:
    members = [
        make_member("e", spouse="f"),
        make_member("f", parent="g"),
        make_member("g"),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["g"]
    f_node = forest[0].children[0]
    assert f_node.id == "f"
    assert f_node.spouse.id == "e"
    assert f_node.spouse.spouse is f_node


def test_siblings_married_to_each_other_render_once() -> None:
    members = [
        make_member("z"),
        make_member("h", parent="z"),
        make_member("i", parent="z"),
    ]
    members[1].spouse_id = "i"

    forest = build_forest(members)

    children = forest[0].children
    assert ids(children) == ["h"]
    assert children[0].spouse.id == "i"


def test_later_sibling_is_the_attached_spouse() -> None:
    members = [
        make_member("z"),
        make_member("h", parent="z", spouse="i", order=2),
        make_member("i", parent="z", spouse="h", order=1),
    ]

    forest = build_forest(members)

    children = forest[0].children
    assert ids(children) == ["i"]
    assert children[0].spouse.id == "h"


# ---------------------------------------------------------------------- #
# Properties
# ---------------------------------------------------------------------- #

def test_sample_family_layout(sample_records) -> None:
    forest = build_forest(sample_records)

    assert ids(forest) == ["g1", "o1"]
    root = forest[0]
    assert root.spouse.id == "m1"
    assert ids(root.children) == ["c1", "c2", "c3"]

    pedro = root.children[0]
    assert pedro.spouse.id == "s1"
    # gc2 has a null child_order, which sorts as 0
    assert ids(pedro.children) == ["gc2", "gc1"]

    assert forest_depth(forest) == 3
    assert_no_duplicates(forest)
    assert_reciprocal(forest)
    assert sorted(collect_member_ids(forest)) == sorted(r["id"] for r in sample_records)


def test_children_union_from_both_sides() -> None:
    members = [
        make_member("a", spouse="b"),
        make_member("b"),
        make_member("c", parent="a", order=1),
        make_member("d", parent="b", order=0),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["a"]
    assert ids(forest[0].children) == ["d", "c"]


def test_one_sided_spouse_link_is_reciprocal() -> None:
    # b comes first and knows nothing about a
    members = [
        make_member("b"),
        make_member("a", spouse="b"),
        make_member("k", parent="a"),
    ]

    forest = build_forest(members)

    assert len(forest) == 1
    couple = forest[0]
    assert {couple.id, couple.spouse.id} == {"a", "b"}
    assert couple.spouse.spouse is couple
    assert ids(couple.children) == ["k"]


def test_spouses_with_parents_in_different_branches_placed_once() -> None:
    members = [
        make_member("p1"),
        make_member("p2"),
        make_member("x", parent="p1", spouse="y"),
        make_member("y", parent="p2", spouse="x"),
        make_member("kid", parent="y"),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["p1", "p2"]
    assert ids(forest[0].children) == ["x"]
    assert forest[0].children[0].spouse.id == "y"
    assert ids(forest[0].children[0].children) == ["kid"]
    assert forest[1].children == []
    assert_no_duplicates(forest)


def test_ties_keep_collection_order_and_builds_are_deterministic() -> None:
    members = [make_member("root")] + [
        make_member(f"s{i}", parent="root", order=None if i % 2 else 0)
        for i in range(6)
    ]

    first = build_forest(members)
    second = build_forest(members)

    assert ids(first[0].children) == [f"s{i}" for i in range(6)]
    assert ids(first[0].children) == ids(second[0].children)
    assert first[0] is not second[0]


def test_merged_children_are_resorted_by_child_order() -> None:
    members = [
        make_member("a", spouse="b"),
        make_member("b", spouse="a"),
        make_member("a2", parent="a", order=2),
        make_member("a4", parent="a", order=4),
        make_member("b1", parent="b", order=1),
        make_member("b3", parent="b", order=3),
    ]

    forest = build_forest(members)

    assert ids(forest[0].children) == ["b1", "a2", "b3", "a4"]


def test_accepts_plain_dicts() -> None:
    forest = build_forest([
        {"id": "a", "first_name": "A", "last_name": "X", "spouse_id": ""},
        {"id": "b", "first_name": "B", "last_name": "X", "parent_id": "a", "nickname": "bee"},
    ])

    assert ids(forest) == ["a"]
    child = forest[0].children[0]
    assert child.member.raw == {"nickname": "bee"}


def test_input_members_are_not_mutated() -> None:
    members = [
        make_member("a", spouse="b"),
        make_member("b"),
        make_member("c", parent="a"),
    ]
    before = [m.to_dict() for m in members]

    build_forest(members)

    assert [m.to_dict() for m in members] == before


# ---------------------------------------------------------------------- #
# Malformed data
# ---------------------------------------------------------------------- #

def test_dangling_references_do_not_crash() -> None:
    members = [
        make_member("a", parent="ghost", spouse="nobody"),
        make_member("b", parent="a"),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["a"]
    assert forest[0].spouse is None
    assert ids(forest[0].children) == ["b"]


def test_self_spouse_and_self_parent_are_ignored() -> None:
    members = [
        make_member("a", spouse="a"),
        make_member("b", parent="b"),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["a", "b"]
    assert all(n.spouse is None for n in forest)


def test_duplicate_ids_keep_first_record() -> None:
    members = [
        make_member("a", first_name="First"),
        make_member("a", first_name="Second"),
    ]

    forest = build_forest(members)

    assert len(forest) == 1
    assert forest[0].member.first_name == "First"


def test_conflicting_spouse_claims_prefer_mutual_pair() -> None:
    members = [
        make_member("a", spouse="b"),
        make_member("b", spouse="c"),
        make_member("c", spouse="b"),
    ]

    forest = build_forest(members)

    assert_no_duplicates(forest)
    couples = {n.id: n.spouse.id if n.spouse else None for n in forest}
    assert couples == {"a": None, "b": "c"}


def test_parent_cycle_terminates_and_is_surfaced() -> None:
    members = [
        make_member("r"),
        make_member("a", parent="b"),
        make_member("b", parent="a"),
        make_member("below", parent="a"),
    ]

    forest = build_forest(members)

    assert ids(forest) == ["r", "a"]
    assert ids(forest[1].children) == ["b", "below"]
    assert_no_duplicates(forest)


def test_parent_cycle_behind_a_spouse() -> None:
    members = [
        make_member("r", spouse="a"),
        make_member("a", parent="b"),
        make_member("b", parent="a"),
    ]

    forest = build_forest(members)

    # r is anchored to a, so the couple is entered from the cycle side
    assert ids(forest) == ["a"]
    assert forest[0].spouse.id == "r"
    assert sorted(collect_member_ids(forest)) == ["a", "b", "r"]


# ---------------------------------------------------------------------- #
# Lower-level operations
# ---------------------------------------------------------------------- #

def test_build_children_of_unknown_parent_is_empty() -> None:
    builder = TreeBuilder([make_member("a")])

    assert builder.build_children_of("missing") == []


def test_build_children_of_subtree() -> None:
    builder = TreeBuilder([
        make_member("a"),
        make_member("b", parent="a", order=1),
        make_member("c", parent="a", order=0),
    ])

    assert ids(builder.build_children_of("a")) == ["c", "b"]


def test_select_roots_drops_spouses_and_anchored_members() -> None:
    builder = TreeBuilder([
        make_member("e", spouse="f"),
        make_member("f", parent="g"),
        make_member("g"),
    ])

    # e waits for f, so the top level only holds g
    built = builder.build_children_of(None)
    assert ids(built) == ["g"]

    roots = builder.select_roots(built)
    assert ids(roots) == ["g"]
    (g,) = roots
    assert g.children[0].id == "f"
    assert g.children[0].spouse.id == "e"
    assert sorted(collect_member_ids(roots)) == ["e", "f", "g"]
    assert builder.is_anchored("e")
    assert not builder.is_anchored("g")
