"""Domain models and entities.

Why:
- Pure, immutable value types (Pydantic v2) for breeds, questions and states.
- The domain knows nothing about HTTP, files or the terminal.
"""

from core.domain.errors import CatalogUnavailable, EmptyCatalog, QuizError, ScoreStoreError
from core.domain.models import (
    AnswerOutcome,
    AnswerResult,
    Breed,
    Failed,
    GameState,
    Idle,
    Loaded,
    Loading,
    Question,
    breeds_from_taxonomy,
    display_name,
    path_key,
    sort_breeds,
)

__all__ = [
    "AnswerOutcome",
    "AnswerResult",
    "Breed",
    "CatalogUnavailable",
    "EmptyCatalog",
    "Failed",
    "GameState",
    "Idle",
    "Loaded",
    "Loading",
    "Question",
    "QuizError",
    "ScoreStoreError",
    "breeds_from_taxonomy",
    "display_name",
    "path_key",
    "sort_breeds",
]
