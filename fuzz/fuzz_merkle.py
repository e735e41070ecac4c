"""Fuzz harness for Merkle tree construction & JSON round trip."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from merkle_core.models import node_to_model, verify_model
    from merkle_core.tree import build_merkle_tree


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    # Split data deterministically into blocks (bounded count)
    size = max(1, min(32, data[0]))
    blocks = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 32), size)]
    tree = build_merkle_tree(blocks)
    if not blocks:
        if tree.root is not None or tree.levels:
            raise RuntimeError("empty input produced a tree")
        return
    if len(tree.levels[0]) != len(blocks) or len(tree.levels[-1]) != 1:
        raise RuntimeError("bad level sizes")
    for prev, cur in zip(tree.levels, tree.levels[1:]):
        if len(cur) != (len(prev) + 1) // 2:
            raise RuntimeError("level did not halve")
    if build_merkle_tree(blocks).root_hash != tree.root_hash:
        raise RuntimeError("non-deterministic root")
    # Only valid UTF-8 leaves survive the JSON round trip unchanged
    try:
        for b in blocks:
            b.decode("utf-8")
    except UnicodeDecodeError:
        return
    if not verify_model(node_to_model(tree.root)):
        raise RuntimeError("serialized tree failed verification")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
