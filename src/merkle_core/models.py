from __future__ import annotations
import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator

from .hashing import DIGEST_HEX_LEN, combine, hash_data
from .tree import Internal, Leaf, MerkleTree, Node

_HEX_DIGEST = re.compile(r"^[0-9a-f]{%d}$" % DIGEST_HEX_LEN)


class _NodeBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    hash: str

    @field_validator("hash")
    @classmethod
    def _lower_hex(cls, v: str) -> str:
        if not _HEX_DIGEST.match(v):
            raise ValueError("hash must be a lower-case hex sha256 digest")
        return v


class LeafModel(_NodeBase):
    data: str


class InternalModel(_NodeBase):
    left: "NodeModel"
    right: "NodeModel"


NodeModel = Union[LeafModel, InternalModel]
InternalModel.model_rebuild()

_root_adapter: TypeAdapter = TypeAdapter(Optional[NodeModel])


def node_to_model(node: Node, encoding: str = "utf-8") -> NodeModel:
    """Mirror a node as a pydantic model; bytes data is decoded for JSON."""
    if isinstance(node, Leaf):
        data = node.data
        if not isinstance(data, str):
            data = bytes(data).decode(encoding, errors="backslashreplace")
        return LeafModel(hash=node.hash, data=data)
    return InternalModel(
        hash=node.hash,
        left=node_to_model(node.left, encoding),
        right=node_to_model(node.right, encoding),
    )


def model_to_node(model: NodeModel) -> Node:
    if isinstance(model, LeafModel):
        return Leaf(hash=model.hash, data=model.data)
    return Internal(
        hash=model.hash,
        left=model_to_node(model.left),
        right=model_to_node(model.right),
    )


def tree_to_json(tree: MerkleTree, pretty: bool = False, encoding: str = "utf-8") -> str:
    """JSON of the root node, ``null`` for an empty tree."""
    model = node_to_model(tree.root, encoding) if tree.root is not None else None
    return _root_adapter.dump_json(model, indent=2 if pretty else None).decode("utf-8")


def parse_tree_json(raw: Union[str, bytes]) -> Optional[NodeModel]:
    """Parse JSON written by :func:`tree_to_json`. Raises pydantic.ValidationError."""
    return _root_adapter.validate_json(raw)


def verify_model(model: Optional[NodeModel]) -> bool:
    """Recompute every hash of a parsed tree and compare with the stored ones.

    Leaf data is hashed as UTF-8 text, so a tree built from bytes that were
    not valid UTF-8 will not verify after the round trip through JSON.
    """
    if model is None:
        return True
    if isinstance(model, LeafModel):
        return hash_data(model.data) == model.hash
    if combine(model.left.hash, model.right.hash) != model.hash:
        return False
    return verify_model(model.left) and verify_model(model.right)
