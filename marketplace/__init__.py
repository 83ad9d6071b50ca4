"""Marketplace listings service: domain core, use cases and reference adapters."""

__version__ = "0.1.0"
