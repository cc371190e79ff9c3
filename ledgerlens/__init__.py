"""Chain-state snapshot, decoding and aggregation toolkit."""

__version__ = "0.1.0"
