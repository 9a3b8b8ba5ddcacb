"""Cross-cutting utilities shared by the rankline modules."""
