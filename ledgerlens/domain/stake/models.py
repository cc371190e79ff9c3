"""Domain models for stake delegation edges."""

from __future__ import annotations

from dataclasses import dataclass

from ..common.decoding import U128, uint
from ..common.identity import Identity
from ..common.value_tree import ValueTree


@dataclass(frozen=True, slots=True)
class StakeEdge:
    """Stake placed by ``source`` on ``target``."""

    source: Identity
    target: Identity
    amount: int


def decode_stake_amount(tree: ValueTree) -> int:
    """Stake values are a bare u128, possibly wrapped in a single-field composite."""
    return uint(tree, U128, "value")
