import hashlib

import pytest

from merkle_core.hashing import hash_data
from merkle_core.tree import (
    Internal,
    Leaf,
    MerkleTree,
    build_merkle_tree,
    is_leaf,
    iter_nodes,
)


def H(s: str) -> str:
    return hashlib.sha256(s.encode()).hexdigest()


def test_empty_input():
    tree = build_merkle_tree([])
    assert tree.root is None
    assert tree.levels == []
    assert tree.root_hash is None
    assert len(tree) == 0
    assert tree.height == 0


def test_single_block_root_is_leaf():
    tree = build_merkle_tree(["a"])
    assert len(tree.levels) == 1
    assert tree.root is tree.levels[0][0]
    assert tree.root == Leaf(hash=H("a"), data="a")
    assert tree.height == 0


def test_two_blocks():
    tree = build_merkle_tree(["a", "b"])
    assert [len(lvl) for lvl in tree.levels] == [2, 1]
    assert isinstance(tree.root, Internal)
    assert tree.root_hash == H(H("a") + H("b"))
    assert tree.root.left is tree.levels[0][0]
    assert tree.root.right is tree.levels[0][1]


def test_three_blocks_duplicates_odd_tail():
    tree = build_merkle_tree(["a", "b", "c"])
    assert [len(lvl) for lvl in tree.levels] == [3, 2, 1]
    ab, cc = tree.levels[1]
    assert ab.hash == H(H("a") + H("b"))
    assert cc.hash == H(H("c") + H("c"))
    # the odd tail is shared, not copied
    assert cc.left is cc.right is tree.levels[0][2]
    assert tree.root_hash == H(ab.hash + cc.hash)


def test_leaves_keep_input_order_and_data():
    blocks = [b"x", b"y", b"z", b""]
    tree = build_merkle_tree(blocks)
    assert [leaf.data for leaf in tree.leaves] == blocks
    assert [leaf.hash for leaf in tree.leaves] == [hash_data(b) for b in blocks]


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7, 8, 9, 16, 33])
def test_level_sizes_and_height(n):
    tree = build_merkle_tree([f"block-{i}" for i in range(n)])
    sizes = [len(lvl) for lvl in tree.levels]
    assert sizes[0] == n
    assert sizes[-1] == 1
    for prev, cur in zip(sizes, sizes[1:]):
        assert cur == (prev + 1) // 2
    assert tree.height == (n - 1).bit_length()


def test_internal_hashes_match_children():
    tree = build_merkle_tree([str(i) for i in range(11)])
    for node in iter_nodes(tree.root):
        if isinstance(node, Internal):
            assert node.hash == hash_data(node.left.hash + node.right.hash)
        else:
            assert node.hash == hash_data(node.data)


def test_deterministic():
    blocks = ["a", "b", "c", "d", "e"]
    assert build_merkle_tree(blocks).root_hash == build_merkle_tree(list(blocks)).root_hash


def test_sensitive_to_content_and_order():
    base = build_merkle_tree(["a", "b", "c", "d"]).root_hash
    assert build_merkle_tree(["a", "b", "c", "D"]).root_hash != base
    assert build_merkle_tree(["b", "a", "c", "d"]).root_hash != base
    assert build_merkle_tree(["a", "b", "c"]).root_hash != base


def test_from_blocks_matches_function():
    assert MerkleTree.from_blocks(["a", "b"]).root_hash == build_merkle_tree(["a", "b"]).root_hash


def test_custom_hasher_is_used_everywhere():
    calls = []

    def hasher(data):
        calls.append(data)
        return hashlib.md5(data.encode() if isinstance(data, str) else data).hexdigest()

    tree = build_merkle_tree(["a", "b", "c"], hasher=hasher)
    # 3 leaves + 2 + 1 internal nodes
    assert len(calls) == 6
    assert len(tree.root_hash) == 32


def test_hasher_error_propagates():
    with pytest.raises(TypeError):
        build_merkle_tree(["a", None, "c"])


def test_nodes_are_immutable():
    tree = build_merkle_tree(["a", "b"])
    with pytest.raises(AttributeError):
        tree.root.hash = "0" * 64


def test_iter_nodes_preorder():
    tree = build_merkle_tree(["a", "b", "c"])
    nodes = list(iter_nodes(tree.root))
    assert nodes[0] is tree.root
    assert sum(1 for n in nodes if is_leaf(n)) == 4  # c appears in both slots
    assert [n.data for n in nodes if is_leaf(n)] == ["a", "b", "c", "c"]


def test_duplicated_tail_collides_with_explicit_duplicate():
    # known property of duplicate-last padding
    assert build_merkle_tree(["a", "b", "c"]).root_hash == build_merkle_tree(["a", "b", "c", "c"]).root_hash
