"""Tests for Affordances collections."""

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from xhn.model import Affordance, Affordances, Input, affordances, merge_metadata


def _walk(node):
    """Yield every node of a tree, composites included."""
    yield node
    if isinstance(node, Affordances):
        for child in node.get_children():
            yield from _walk(child)


def _build_tree(shape, counter):
    """Build a tree from a nested-list shape: lists are composites, None is a leaf."""
    counter[0] += 1
    tree = Affordances(f"c{counter[0]}")
    for item in shape:
        if isinstance(item, list):
            tree.add_affordance(_build_tree(item, counter))
        else:
            counter[0] += 1
            tree.add_affordance(Affordance(f"a{counter[0]}", "GET", f"/{counter[0]}"))
    return tree


tree_shapes = st.recursive(
    st.lists(st.none(), max_size=3),
    lambda children: st.lists(st.one_of(st.none(), children), max_size=4),
    max_leaves=12,
)


# ============================================================================
# Building
# ============================================================================

@pytest.mark.unit
def test_empty_collection():
    """Test an empty collection has children and no id or metadata."""
    tree = affordances()

    assert tree.get_id() is None
    assert tree.get_metadata() is None
    assert tree.get_children() == []
    assert tree.get_count() == 0
    assert tree.get_last_affordance() is None


@pytest.mark.unit
def test_add_affordance_twice_counts_once():
    """Test the same reference is only added once."""
    action = Affordance("a", "GET", "/a")
    tree = Affordances().add_affordance(action).add_affordance(action)

    assert tree.get_count() == 1


@pytest.mark.unit
def test_add_affordance_allows_equal_but_distinct_nodes():
    """Test duplicate rejection is by identity, not equality."""
    tree = Affordances().add_affordance(Affordance("a", "GET", "/")).add_affordance(
        Affordance("a", "GET", "/")
    )

    assert tree.get_count() == 2


@pytest.mark.unit
@pytest.mark.parametrize("bad", [None, "a", {"id": "a", "method": "GET", "uri": "/"}, Input("a", 1)])
def test_add_affordance_rejects_other_types(bad):
    """Test only Affordance and Affordances can be added."""
    assert Affordances().add_affordance(bad).get_count() == 0


@pytest.mark.unit
def test_add_affordance_rejects_cycles():
    """Test a collection cannot contain itself, directly or through a descendant."""
    outer = Affordances("outer")
    inner = Affordances("inner")
    outer.add_affordance(inner)

    outer.add_affordance(outer)
    inner.add_affordance(outer)

    assert outer.get_count() == 1
    assert inner.get_count() == 0


@pytest.mark.unit
def test_get_count_is_shallow(user_tree):
    """Test get_count only counts direct children."""
    assert user_tree.get_count() == 2


@pytest.mark.unit
def test_index_access(user_tree):
    """Test index lookup and last-child access."""
    assert user_tree.get_affordance_at_index(0).get_id() == "entry"
    assert user_tree.get_last_affordance().get_id() == "users"
    assert user_tree.get_affordance_at_index(2) is None
    assert user_tree.get_affordance_at_index(-1) is None
    assert user_tree.get_affordance_at_index("0") is None


@pytest.mark.unit
def test_setters_ignore_malformed():
    """Test id and metadata setters keep previous values on bad input."""
    tree = Affordances("x").set_metadata({"k": "v"})

    tree.set_id(None).set_metadata(["k"])

    assert tree.get_id() == "x"
    assert tree.get_metadata() == {"k": "v"}


# ============================================================================
# Search
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize("id", ["api", "entry", "users", "get-users", "create-user"])
def test_has_affordance_with_id_finds_nested(user_tree, id):
    """Test ids are found at every depth, composites included."""
    wrapper = Affordances().add_affordance(user_tree)

    assert wrapper.has_affordance_with_id(id)


@pytest.mark.unit
def test_has_affordance_with_id_missing(user_tree):
    """Test absent and non-string ids are not found."""
    assert not user_tree.has_affordance_with_id("delete-user")
    assert not user_tree.has_affordance_with_id(None)
    assert not user_tree.has_affordance_with_id(1)
    assert not Affordances().has_affordance_with_id("anything")


@pytest.mark.unit
def test_has_affordance_with_id_ignores_own_id(user_tree):
    """Test the root's own id is not part of its search space."""
    assert not user_tree.has_affordance_with_id("api")


@pytest.mark.unit
def test_copy_affordance_by_id_cascades_nearest_ancestor(cascade_tree):
    """Test nearest-ancestor precedence when copying out of a tree."""
    root, _, _ = cascade_tree

    assert root.copy_affordance_by_id("L").get_metadata() == {"a": 2, "b": 3}


@pytest.mark.unit
def test_copy_affordance_by_id_does_not_mutate_tree(cascade_tree):
    """Test the canonical tree is untouched by copying out of it."""
    root, composite, leaf = cascade_tree

    copied = root.copy_affordance_by_id("L")
    copied.get_metadata()["c"] = 4

    assert copied is not leaf
    assert leaf.get_metadata() == {"b": 3}
    assert composite.get_metadata() == {"a": 2, "b": 2}
    assert root.get_metadata() == {"a": 1}
    assert root.copy_affordance_by_id("L").get_metadata() == {"a": 2, "b": 3}


@pytest.mark.unit
def test_copy_affordance_by_id_composite(cascade_tree):
    """Test copying a composite cascades ancestors onto it and copies its children."""
    root, composite, leaf = cascade_tree

    copied = root.copy_affordance_by_id("C")

    assert isinstance(copied, Affordances)
    assert copied is not composite
    assert copied.get_metadata() == {"a": 2, "b": 2}
    assert copied.get_children()[0] is not leaf
    assert copied.get_children()[0].get_metadata() == {"b": 3}


@pytest.mark.unit
def test_copy_affordance_by_id_without_metadata():
    """Test metadata stays absent when no ancestor contributes any."""
    tree = Affordances().add_affordance(Affordances().add_affordance(Affordance("x", "GET", "/")))

    assert tree.copy_affordance_by_id("x").get_metadata() is None


@pytest.mark.unit
def test_copy_affordance_by_id_missing(user_tree):
    """Test a missing or non-string id yields None."""
    assert user_tree.copy_affordance_by_id("nope") is None
    assert user_tree.copy_affordance_by_id(None) is None


@pytest.mark.unit
def test_copy_affordance_by_id_first_match_wins():
    """Test duplicate ids resolve to the first depth-first match."""
    first = Affordance("dup", "GET", "/first")
    second = Affordance("dup", "GET", "/second")
    tree = Affordances().add_affordance(Affordances().add_affordance(first)).add_affordance(second)

    assert tree.copy_affordance_by_id("dup").get_uri() == "/first"


@pytest.mark.unit
def test_copy_affordance_by_id_copies_inputs(user_tree, name_input):
    """Test inputs on the copied affordance are copies too."""
    copied = user_tree.copy_affordance_by_id("create-user")

    assert copied.get_metadata() == {
        "Cache-Control": "no-cache",
        "Content-Type": "application/json",
    }
    assert copied.get_inputs()[0] is not name_input
    assert copied.get_inputs()[0].get_label() == "Name"


@pytest.mark.unit
def test_cascade_metadata_on_collection(cascade_tree):
    """Test cascading onto a collection returns a merged copy."""
    _, composite, _ = cascade_tree

    cascaded = composite.cascade_metadata({"a": 0, "z": 9})

    assert cascaded is not composite
    assert cascaded.get_metadata() == {"a": 2, "b": 2, "z": 9}
    assert composite.get_metadata() == {"a": 2, "b": 2}


@pytest.mark.unit
def test_merge_metadata_is_pure():
    """Test the merge helper never mutates its inputs."""
    parent, child = {"a": 1}, {"a": 2, "b": 2}

    merged = merge_metadata(parent, child)

    assert merged == {"a": 2, "b": 2}
    assert merged is not parent and merged is not child
    assert parent == {"a": 1}
    assert merge_metadata(None, None) is None
    assert merge_metadata({"a": 1}, None) == {"a": 1}


# ============================================================================
# Traversal
# ============================================================================

@pytest.mark.unit
def test_for_each_affordance_preorder(user_tree):
    """Test leaves are visited depth-first, left to right."""
    visited = []

    result = user_tree.for_each_affordance(lambda leaf: visited.append(leaf.get_id()))

    assert result is user_tree
    assert visited == ["entry", "get-users", "create-user"]


@pytest.mark.unit
def test_for_each_affordance_never_visits_composites(user_tree):
    """Test composites are expanded, not passed to the callback."""
    visited = []
    user_tree.for_each_affordance(visited.append)

    assert all(isinstance(node, Affordance) for node in visited)


@pytest.mark.unit
def test_for_each_affordance_ignores_non_callable(user_tree):
    """Test a non-callable callback is ignored."""
    assert user_tree.for_each_affordance("not callable") is user_tree


@pytest.mark.unit
def test_for_each_affordance_skips_cycles():
    """Test traversal terminates on a cycle introduced behind the API's back."""
    outer = Affordances("outer").add_affordance(Affordance("a", "GET", "/a"))
    inner = Affordances("inner").add_affordance(Affordance("b", "GET", "/b"))
    outer.add_affordance(inner)
    inner._children.append(outer)

    visited = []
    outer.for_each_affordance(lambda leaf: visited.append(leaf.get_id()))

    assert visited == ["a", "b"]
    assert not outer.has_affordance_with_id("missing")


@pytest.mark.unit
def test_iter_affordances_can_stop_early(user_tree):
    """Test the generator form allows early exit."""
    first = next(user_tree.iter_affordances())

    assert first.get_id() == "entry"


# ============================================================================
# Copying and revival
# ============================================================================

@pytest.mark.unit
def test_copy_shares_no_nodes(user_tree):
    """Test copy produces an equal tree with no shared node identities."""
    duplicate = user_tree.copy()

    assert duplicate.to_plain() == user_tree.to_plain()
    originals = {id(node) for node in _walk(user_tree)}
    assert not originals & {id(node) for node in _walk(duplicate)}


@pytest.mark.unit
def test_to_plain_shape(cascade_tree):
    """Test the plain form mirrors the tree."""
    root, _, _ = cascade_tree

    assert root.to_plain() == {
        "id": "R",
        "metadata": {"a": 1},
        "children": [
            {
                "id": "C",
                "metadata": {"a": 2, "b": 2},
                "children": [{"id": "L", "method": "GET", "uri": "/l", "metadata": {"b": 3}}],
            }
        ],
    }
    assert Affordances().to_plain() == {"children": []}


@pytest.mark.unit
def test_revive(cascade_tree):
    """Test revival from plain children prefers the Affordance shape."""
    root, _, _ = cascade_tree

    revived = Affordances.revive(root.to_plain())

    assert Affordances.is_affordances(revived)
    assert revived.to_plain() == root.to_plain()
    assert isinstance(revived.get_children()[0], Affordances)
    assert isinstance(revived.get_children()[0].get_children()[0], Affordance)


@pytest.mark.unit
def test_revive_rejects_unrevivable():
    """Test objects without a children list cannot be revived."""
    assert not Affordances.can_revive({"id": "x"})
    assert not Affordances.can_revive({"children": "none"})
    assert Affordances.revive({"id": "x"}) is None


@hypothesis_settings(max_examples=50)
@given(tree_shapes)
def test_copy_property(shape):
    """Property test: copies are structurally equal and share no nodes."""
    tree = _build_tree(shape, [0])
    duplicate = tree.copy()

    assert duplicate.to_plain() == tree.to_plain()
    assert not {id(n) for n in _walk(tree)} & {id(n) for n in _walk(duplicate)}


@hypothesis_settings(max_examples=50)
@given(tree_shapes)
def test_search_and_traversal_property(shape):
    """Property test: every nested id is found and every leaf visited once, in pre-order."""
    tree = _build_tree(shape, [0])
    nested = [node for node in _walk(tree) if node is not tree]

    for node in nested:
        assert tree.has_affordance_with_id(node.get_id())
    assert not tree.has_affordance_with_id("missing")

    visited = []
    tree.for_each_affordance(visited.append)
    leaves = [node for node in nested if isinstance(node, Affordance)]
    assert [id(node) for node in visited] == [id(node) for node in leaves]
