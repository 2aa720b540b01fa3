"""Concrete adapters (HTTP catalog, score persistence)."""
