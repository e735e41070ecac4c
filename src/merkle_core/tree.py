from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Union

from .hashing import Block, hash_data

log = logging.getLogger(__name__)

Hasher = Callable[[Block], str]


@dataclass(frozen=True)
class Leaf:
    hash: str
    data: Block


@dataclass(frozen=True)
class Internal:
    hash: str
    left: "Node"
    right: "Node"


Node = Union[Leaf, Internal]


def is_leaf(node: Node) -> bool:
    return isinstance(node, Leaf)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Pre-order walk. A duplicated odd tail is yielded once per slot."""
    stack: List[Node] = [node]
    while stack:
        n = stack.pop()
        yield n
        if isinstance(n, Internal):
            stack.append(n.right)
            stack.append(n.left)


@dataclass
class MerkleTree:
    root: Optional[Node] = None
    levels: List[List[Node]] = field(default_factory=list)  # level 0 = leaves

    @classmethod
    def from_blocks(
        cls, blocks: Sequence[Block], hasher: Hasher = hash_data
    ) -> "MerkleTree":
        return build_merkle_tree(blocks, hasher)

    @property
    def root_hash(self) -> Optional[str]:
        return self.root.hash if self.root is not None else None

    @property
    def leaves(self) -> List[Node]:
        return self.levels[0] if self.levels else []

    @property
    def height(self) -> int:
        return max(len(self.levels) - 1, 0)

    def __len__(self) -> int:
        return len(self.leaves)


def build_merkle_tree(
    blocks: Sequence[Block], hasher: Hasher = hash_data
) -> MerkleTree:
    """Build a Merkle tree bottom-up over ``blocks`` in the given order.

    Leaves hash the raw block, parents hash the concatenation of their
    children's hex digests. On a level with an odd count the last node is
    paired with itself; the parent then holds the same node object in
    both ``left`` and ``right``. A single block yields a tree whose root is
    that leaf. Empty input yields ``MerkleTree(root=None, levels=[])``.
    """
    if not blocks:
        return MerkleTree()
    lvl: List[Node] = [Leaf(hash=hasher(b), data=b) for b in blocks]
    levels = [lvl]
    log.debug("level 0: %d leaves", len(lvl))
    while len(lvl) > 1:
        nxt: List[Node] = []
        for i in range(0, len(lvl), 2):
            left = lvl[i]
            right = lvl[i + 1] if i + 1 < len(lvl) else lvl[i]  # duplicate last if odd
            nxt.append(Internal(hash=hasher(left.hash + right.hash), left=left, right=right))
        levels.append(nxt)
        log.debug("level %d: %d nodes", len(levels) - 1, len(nxt))
        lvl = nxt
    log.debug("merkle root %s over %d blocks", lvl[0].hash, len(blocks))
    return MerkleTree(root=lvl[0], levels=levels)
