"""Domain layer utilities for stake edges."""

from .models import StakeEdge, decode_stake_amount
from .service import StakeService, decode_stake_entry

__all__ = [
    "StakeEdge",
    "StakeService",
    "decode_stake_amount",
    "decode_stake_entry",
]
