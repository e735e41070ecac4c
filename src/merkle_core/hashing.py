from __future__ import annotations
import hashlib
from typing import Union

Block = Union[bytes, bytearray, memoryview, str]

DIGEST_HEX_LEN = 64


def _as_bytes(data: Block) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"block must be bytes or str, got {type(data).__name__}")


def hash_data(data: Block) -> str:
    """SHA-256 of a block as a lower-case hex string. Text is UTF-8 encoded."""
    return hashlib.sha256(_as_bytes(data)).hexdigest()


def combine(left: str, right: str) -> str:
    # hex strings are concatenated, not the raw digests
    return hash_data(left + right)
