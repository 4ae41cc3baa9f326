"""I/O layer: map loading, Parquet schemas, and output paths."""
