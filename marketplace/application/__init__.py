"""Application Layer - use cases (commands, queries, handlers)."""
