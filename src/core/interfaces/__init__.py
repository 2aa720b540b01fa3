"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions only.
"""

from core.interfaces.catalog import CatalogSource
from core.interfaces.score_store import ScoreStore

__all__ = ["CatalogSource", "ScoreStore"]
