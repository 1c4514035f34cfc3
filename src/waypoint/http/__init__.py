"""Request and query-string primitives."""
