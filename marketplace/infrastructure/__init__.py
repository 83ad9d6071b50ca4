"""Infrastructure Layer - adapters for domain ports (storage, messaging)."""
