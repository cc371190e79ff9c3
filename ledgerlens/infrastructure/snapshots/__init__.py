from .json_repository import ACCOUNTS, STAKE, TOTAL_BALANCES, JsonSnapshotRepository

__all__ = ["ACCOUNTS", "STAKE", "TOTAL_BALANCES", "JsonSnapshotRepository"]
