"""Game services (orchestration on top of the domain)."""

from core.services.quiz_engine import (
    BREEDS_FAILED_MESSAGE,
    IMAGE_FAILED_MESSAGE,
    QuizEngine,
    build_options,
)

__all__ = [
    "BREEDS_FAILED_MESSAGE",
    "IMAGE_FAILED_MESSAGE",
    "QuizEngine",
    "build_options",
]
