"""Domain models for system accounts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..common.decoding import U32, U64, U128, field, uint
from ..common.value_tree import Named, Positional, ValueTree


def _int_field(payload: Dict[str, Any], name: str, bits: int) -> int:
    try:
        value = payload[name]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"missing field {name!r}") from exc
    if isinstance(value, bool):
        raise ValueError(f"field {name!r} must be an integer")
    if isinstance(value, str) and value.isdecimal():
        value = int(value)
    if not isinstance(value, int) or value < 0 or value >= 1 << bits:
        raise ValueError(f"field {name!r} must be a u{bits}")
    return value


@dataclass(frozen=True, slots=True)
class AccountBalance:
    free: int
    reserved: int
    frozen: int
    flags: int = 0

    @property
    def total(self) -> int:
        return self.free + self.reserved + self.frozen

    @classmethod
    def from_tree(cls, tree: ValueTree, path: str = "data") -> "AccountBalance":
        # Runtimes predating extra flags omit the fourth field.
        if isinstance(tree, Named) and tree.get("flags") is None:
            flags = 0
        elif isinstance(tree, Positional) and len(tree) == 3:
            flags = 0
        else:
            flags = uint(field(tree, "flags", 3, path), U128, f"{path}.flags")
        return cls(
            free=uint(field(tree, "free", 0, path), U64, f"{path}.free"),
            reserved=uint(field(tree, "reserved", 1, path), U64, f"{path}.reserved"),
            frozen=uint(field(tree, "frozen", 2, path), U64, f"{path}.frozen"),
            flags=flags,
        )

    @classmethod
    def from_mapping(cls, payload: Dict[str, Any]) -> "AccountBalance":
        if not isinstance(payload, dict):
            raise ValueError("account data must be an object")
        return cls(
            free=_int_field(payload, "free", U64),
            reserved=_int_field(payload, "reserved", U64),
            frozen=_int_field(payload, "frozen", U64),
            flags=_int_field(payload, "flags", U128),
        )

    def to_mapping(self) -> Dict[str, int]:
        return {
            "free": self.free,
            "reserved": self.reserved,
            "frozen": self.frozen,
            "flags": self.flags,
        }


@dataclass(frozen=True, slots=True)
class AccountRecord:
    """Decoded ``System.Account`` value."""

    nonce: int
    consumers: int
    providers: int
    sufficients: int
    balance: AccountBalance

    @classmethod
    def from_tree(cls, tree: ValueTree) -> "AccountRecord":
        return cls(
            nonce=uint(field(tree, "nonce", 0), U32, "nonce"),
            consumers=uint(field(tree, "consumers", 1), U32, "consumers"),
            providers=uint(field(tree, "providers", 2), U32, "providers"),
            sufficients=uint(field(tree, "sufficients", 3), U32, "sufficients"),
            balance=AccountBalance.from_tree(field(tree, "data", 4)),
        )

    @classmethod
    def from_mapping(cls, payload: Dict[str, Any]) -> "AccountRecord":
        if not isinstance(payload, dict):
            raise ValueError("account record must be an object")
        data = payload.get("data", payload.get("balance"))
        return cls(
            nonce=_int_field(payload, "nonce", U32),
            consumers=_int_field(payload, "consumers", U32),
            providers=_int_field(payload, "providers", U32),
            sufficients=_int_field(payload, "sufficients", U32),
            balance=AccountBalance.from_mapping(data),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "nonce": self.nonce,
            "consumers": self.consumers,
            "providers": self.providers,
            "sufficients": self.sufficients,
            "data": self.balance.to_mapping(),
        }
