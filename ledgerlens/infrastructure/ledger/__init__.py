from .reader import SubstrateLedgerReader
from .session import LedgerSession

__all__ = ["LedgerSession", "SubstrateLedgerReader"]
