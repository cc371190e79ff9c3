"""Domain layer: decoding, records and aggregation."""
