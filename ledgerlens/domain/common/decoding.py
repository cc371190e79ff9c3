"""Recursive-descent helpers for turning value trees into typed records.

Every helper raises DecodeError with a path describing where the tree
diverged from the expected layout. Bulk decoding goes through
``collect_decoded`` which isolates per-record failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dc_field
from typing import AsyncIterable, Callable, Generic, Optional, TypeVar

from .exceptions import DecodeError
from .identity import IDENTITY_LENGTH, Identity
from .value_tree import Named, Positional, Scalar, ValueTree, describe

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")

U8 = 8
U32 = 32
U64 = 64
U128 = 128


def byte_leaves(tree: ValueTree, path: str = "$") -> bytes:
    """Flatten every byte-valued leaf below ``tree`` in order."""
    if isinstance(tree, Scalar):
        value = tree.value
        if isinstance(value, bytes):
            return value
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF:
            return bytes((value,))
        if isinstance(value, str) and value.startswith(("0x", "0X")):
            try:
                return bytes.fromhex(value[2:])
            except ValueError as exc:
                raise DecodeError("invalid hex byte string", path) from exc
        raise DecodeError(f"expected byte leaf, found {describe(tree)}", path)
    out = bytearray()
    for index, child in enumerate(tree.children()):
        out += byte_leaves(child, f"{path}[{index}]")
    return bytes(out)


def _identity_from_bytes(data: bytes, path: str) -> Identity:
    if len(data) < IDENTITY_LENGTH:
        raise DecodeError(f"identity needs {IDENTITY_LENGTH} bytes, found {len(data)}", path)
    return Identity(data[:IDENTITY_LENGTH])


def _identity_from_text(value: str, path: str) -> Identity:
    try:
        return Identity.parse(value)
    except ValueError as exc:
        raise DecodeError(f"invalid address {value!r}", path) from exc


def identity_from_key(key: ValueTree, path: str = "key") -> Identity:
    """Decode an identity embedded in a storage key element.

    The expected shape is ``Positional([Positional([byte, ...]), ...])``: the
    first element of the outer composite holds the identity bytes. At least
    32 bytes are required and the first 32 are used.
    """
    if isinstance(key, Scalar):
        if isinstance(key.value, str) and not key.value.startswith(("0x", "0X")):
            return _identity_from_text(key.value, path)
        return _identity_from_bytes(byte_leaves(key, path), path)
    if not isinstance(key, Positional):
        raise DecodeError(f"expected positional key composite, found {describe(key)}", path)
    if not key.items:
        raise DecodeError("empty key composite", path)
    first = key.items[0]
    if isinstance(first, Scalar):
        # Key already flattened to its byte leaves.
        return _identity_from_bytes(byte_leaves(key, path), path)
    if not isinstance(first, Positional):
        raise DecodeError(f"expected positional inner composite, found {describe(first)}", f"{path}[0]")
    return _identity_from_bytes(byte_leaves(first, f"{path}[0]"), f"{path}[0]")


def identity_from_value(tree: ValueTree, path: str = "$") -> Identity:
    """Decode an identity stored as a value (owner fields and similar)."""
    if isinstance(tree, Scalar) and isinstance(tree.value, str) and not tree.value.startswith(("0x", "0X")):
        return _identity_from_text(tree.value, path)
    data = byte_leaves(tree, path)
    if len(data) != IDENTITY_LENGTH:
        raise DecodeError(f"identity needs exactly {IDENTITY_LENGTH} bytes, found {len(data)}", path)
    return Identity(data)


def field(tree: ValueTree, name: str, index: int, path: str = "$") -> ValueTree:
    """Pick a child by name for named composites or by position otherwise."""
    if isinstance(tree, Named):
        child = tree.get(name)
        if child is None:
            raise DecodeError(f"missing field {name!r}", path)
        return child
    if isinstance(tree, Positional):
        if index >= len(tree.items):
            raise DecodeError(f"missing positional field {index} ({name})", path)
        return tree.items[index]
    raise DecodeError(f"expected composite with field {name!r}, found {describe(tree)}", path)


def _newtype_inner(tree: ValueTree) -> Optional[ValueTree]:
    if isinstance(tree, (Named, Positional)) and len(tree) == 1:
        return next(iter(tree.children()))
    return None


def uint(tree: ValueTree, bits: int, path: str = "$") -> int:
    """Coerce a scalar leaf (or single-field wrapper) to an unsigned int of ``bits`` width."""
    inner = _newtype_inner(tree)
    if inner is not None:
        return uint(inner, bits, path)
    if not isinstance(tree, Scalar):
        raise DecodeError(f"expected integer, found {describe(tree)}", path)
    value = tree.value
    if isinstance(value, bool):
        raise DecodeError("expected integer, found bool", path)
    if isinstance(value, str):
        try:
            value = int(value, 16) if value.startswith(("0x", "0X")) else int(value)
        except ValueError as exc:
            raise DecodeError(f"non-numeric string {value!r}", path) from exc
    if not isinstance(value, int):
        raise DecodeError(f"expected integer, found {describe(tree)}", path)
    if value < 0 or value >= 1 << bits:
        raise DecodeError(f"value {value} out of range for u{bits}", path)
    return value


def is_none(tree: ValueTree) -> bool:
    if isinstance(tree, Scalar):
        return tree.value is None
    if isinstance(tree, Named) and tree.names() == ["None"]:
        return True
    return False


def optional(tree: ValueTree) -> Optional[ValueTree]:
    """Resolve an Option: None markers become None, ``{"Some": x}`` becomes x."""
    if is_none(tree):
        return None
    if isinstance(tree, Named) and tree.names() == ["Some"]:
        return tree.fields[0][1]
    return tree


def text(tree: ValueTree, path: str = "$") -> str:
    """Render a byte string (bounded vec, raw bytes or str) as text, replacing invalid UTF-8."""
    if isinstance(tree, Scalar) and isinstance(tree.value, str) and not tree.value.startswith(("0x", "0X")):
        return tree.value
    inner = _newtype_inner(tree)
    if inner is not None and not isinstance(inner, Scalar):
        return text(inner, path)
    return byte_leaves(tree, path).decode("utf-8", errors="replace")


def variant_name(tree: ValueTree, path: str = "$") -> str:
    """Name of a unit enum variant encoded as ``"Name"`` or ``{"Name": ...}``."""
    if isinstance(tree, Scalar) and isinstance(tree.value, str):
        return tree.value
    if isinstance(tree, Named) and len(tree) == 1:
        return tree.fields[0][0]
    raise DecodeError(f"expected enum variant, found {describe(tree)}", path)


@dataclass(slots=True)
class DecodeFailure:
    index: int
    reason: str


@dataclass(slots=True)
class DecodeBatch(Generic[T]):
    """Outcome of a bulk decode: the records that decoded and the ones that did not."""

    records: list[T] = dc_field(default_factory=list)
    failures: list[DecodeFailure] = dc_field(default_factory=list)

    @property
    def seen(self) -> int:
        return len(self.records) + len(self.failures)


async def collect_decoded(
    entries: AsyncIterable[E],
    decode: Callable[[E], T],
    *,
    label: str = "entry",
) -> DecodeBatch[T]:
    """Fold ``entries`` through ``decode``, dropping and logging entries that fail to decode."""
    batch: DecodeBatch[T] = DecodeBatch()
    index = 0
    async for entry in entries:
        try:
            batch.records.append(decode(entry))
        except DecodeError as exc:
            batch.failures.append(DecodeFailure(index=index, reason=str(exc)))
            logger.warning("Skipping %s #%d: %s", label, index, exc)
        index += 1
    logger.info("Decoded %d %s records (%d skipped)", len(batch.records), label, len(batch.failures))
    return batch


__all__ = [
    "U8",
    "U32",
    "U64",
    "U128",
    "DecodeBatch",
    "DecodeFailure",
    "byte_leaves",
    "collect_decoded",
    "field",
    "identity_from_key",
    "identity_from_value",
    "is_none",
    "optional",
    "text",
    "uint",
    "variant_name",
]
