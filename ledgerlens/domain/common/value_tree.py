"""Schema-less value tree produced from the node's self-describing encoding.

A storage value decoded by the node client arrives as nested dicts, lists,
tuples and scalars. It is normalised here into three node kinds so that the
decoders can walk it without knowing the runtime's type registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

from .exceptions import DecodeError

ScalarValue = Union[int, bool, str, bytes, None]


@dataclass(frozen=True, slots=True)
class Scalar:
    value: ScalarValue


@dataclass(frozen=True, slots=True)
class Named:
    """Composite with named children, kept in wire order."""

    fields: tuple[tuple[str, "ValueTree"], ...]

    def get(self, name: str) -> Optional["ValueTree"]:
        for key, child in self.fields:
            if key == name:
                return child
        return None

    def names(self) -> list[str]:
        return [key for key, _ in self.fields]

    def children(self) -> Iterator["ValueTree"]:
        for _, child in self.fields:
            yield child

    def __len__(self) -> int:
        return len(self.fields)


@dataclass(frozen=True, slots=True)
class Positional:
    """Composite with positionally ordered children."""

    items: tuple["ValueTree", ...]

    def children(self) -> Iterator["ValueTree"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


ValueTree = Union[Scalar, Named, Positional]


def _unwrap(obj: Any) -> Any:
    # Client wrapper objects (ScaleObj and friends) expose the decoded payload as `.value`.
    if isinstance(obj, (dict, list, tuple, str, bytes, bytearray, int, float)) or obj is None:
        return obj
    if hasattr(obj, "value"):
        return obj.value
    return obj


def from_python(obj: Any, path: str = "$") -> ValueTree:
    """Convert a decoded python object into a value tree.

    Raises DecodeError for leaf types that have no tree representation.
    """
    obj = _unwrap(obj)
    if obj is None or isinstance(obj, (bool, int, str)):
        return Scalar(obj)
    if isinstance(obj, (bytes, bytearray)):
        return Scalar(bytes(obj))
    if isinstance(obj, dict):
        return Named(tuple((str(key), from_python(value, f"{path}.{key}")) for key, value in obj.items()))
    if isinstance(obj, (list, tuple)):
        return Positional(tuple(from_python(item, f"{path}[{index}]") for index, item in enumerate(obj)))
    raise DecodeError(f"unsupported leaf type {type(obj).__name__}", path)


def to_python(tree: ValueTree) -> Any:
    """Inverse of from_python, used for diagnostics and JSON rendering."""
    if isinstance(tree, Scalar):
        if isinstance(tree.value, bytes):
            return "0x" + tree.value.hex()
        return tree.value
    if isinstance(tree, Named):
        return {key: to_python(child) for key, child in tree.fields}
    return [to_python(child) for child in tree.items]


def describe(tree: ValueTree) -> str:
    if isinstance(tree, Scalar):
        return f"scalar<{type(tree.value).__name__}>"
    if isinstance(tree, Named):
        return f"named{{{', '.join(tree.names())}}}"
    return f"positional[{len(tree.items)}]"


__all__ = [
    "Named",
    "Positional",
    "Scalar",
    "ScalarValue",
    "ValueTree",
    "describe",
    "from_python",
    "to_python",
]
