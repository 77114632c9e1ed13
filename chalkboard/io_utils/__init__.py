"""I/O, path and timing helpers."""
