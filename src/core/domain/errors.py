"""Error taxonomy of the quiz.

The engine collapses catalog errors into a `Failed` state; these types only
travel between adapters and the engine (and into logs).
"""

from __future__ import annotations


class QuizError(Exception):
    """Base exception for quiz errors."""


class CatalogUnavailable(QuizError):
    """Transport or decoding failure while talking to the breed catalog."""


class EmptyCatalog(CatalogUnavailable):
    """The catalog answered successfully but listed no breeds."""


class ScoreStoreError(QuizError):
    """The score could not be persisted."""
