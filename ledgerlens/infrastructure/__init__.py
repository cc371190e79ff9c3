"""Infrastructure adapters: ledger node access and snapshot files."""
