"""Domain layer utilities for system accounts."""

from .models import AccountBalance, AccountRecord
from .service import AccountEntry, AccountService, decode_account_entry

__all__ = [
    "AccountBalance",
    "AccountEntry",
    "AccountRecord",
    "AccountService",
    "decode_account_entry",
]
