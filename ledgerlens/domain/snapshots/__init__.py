"""Snapshot pipeline and persistence protocol."""

from .repository import SnapshotRepository
from .service import FetchSummary, SnapshotService

__all__ = ["FetchSummary", "SnapshotRepository", "SnapshotService"]
