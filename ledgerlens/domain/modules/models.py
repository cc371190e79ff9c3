"""Domain models for registered modules (services)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..common.decoding import U8, U64, U128, field, identity_from_value, optional, text, uint, variant_name
from ..common.exceptions import DecodeError
from ..common.identity import Identity
from ..common.value_tree import Named, Positional, ValueTree


class ModuleTier(str, Enum):
    OFFICIAL = "Official"
    APPROVED = "Approved"
    UNAPPROVED = "Unapproved"
    DELISTED = "Delisted"


@dataclass(frozen=True, slots=True)
class Module:
    owner: Identity
    id: int
    name: str
    data: Optional[str]
    url: Optional[str]
    collateral: int
    take: int
    tier: Optional[ModuleTier]
    created_at: int
    last_updated: int

    @classmethod
    def from_tree(cls, tree: ValueTree) -> "Module":
        # Positional layouts carry the tier at index 7 only on runtimes that have it.
        tier_tree: Optional[ValueTree]
        if isinstance(tree, Positional) and len(tree) > 9:
            tier_tree, tail = tree.items[7], 8
        elif isinstance(tree, Named):
            tier_tree, tail = tree.get("tier"), 7
        else:
            tier_tree, tail = None, 7
        data = optional(field(tree, "data", 3, "value"))
        url = optional(field(tree, "url", 4, "value"))
        tier: Optional[ModuleTier] = None
        if tier_tree is not None:
            name = variant_name(tier_tree, "value.tier")
            try:
                tier = ModuleTier(name)
            except ValueError as exc:
                raise DecodeError(f"unknown tier {name!r}", "value.tier") from exc
        return cls(
            owner=identity_from_value(field(tree, "owner", 0, "value"), "value.owner"),
            id=uint(field(tree, "id", 1, "value"), U64, "value.id"),
            name=text(field(tree, "name", 2, "value"), "value.name"),
            data=text(data, "value.data") if data is not None else None,
            url=text(url, "value.url") if url is not None else None,
            collateral=uint(field(tree, "collateral", 5, "value"), U128, "value.collateral"),
            take=uint(field(tree, "take", 6, "value"), U8, "value.take"),
            tier=tier,
            created_at=uint(field(tree, "created_at", tail, "value"), U64, "value.created_at"),
            last_updated=uint(field(tree, "last_updated", tail + 1, "value"), U64, "value.last_updated"),
        )
