"""Quiz state machine.

`QuizEngine` owns the game state, the breed cache and the score. The
presentation layer drives it through a handful of operations and reads the
immutable `state` snapshot afterwards; the engine emits no events.

Transitions:

    Idle   --load_breeds_if_needed--> Loading --ok--> advance() --> Loaded
    Idle   --load_breeds_if_needed--> Loading --error/empty--> Failed
    Loaded/Failed --advance--> Loading --image ok--> Loaded
    Loaded/Failed --advance--> Loading --image error--> Failed
    any    --retry--> load_breeds_if_needed() or advance()

The engine expects a single caller. Overlapping `advance()` calls are not
serialised here: whichever fetch completes last decides the state. A
cancelled fetch leaves the matching `Failed` state behind and the
cancellation propagates to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Sequence

from pydantic import ValidationError

from core.domain.errors import CatalogUnavailable, EmptyCatalog
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
    sort_breeds,
)
from core.interfaces.catalog import CatalogSource
from core.interfaces.score_store import ScoreStore

logger = logging.getLogger(__name__)

BREEDS_FAILED_MESSAGE = "Failed to load breeds. Please try again."
IMAGE_FAILED_MESSAGE = "Failed to load image. Please try again."

DEFAULT_OPTION_COUNT = 4


def build_options(
    breeds: Sequence[Breed],
    correct: Breed,
    *,
    option_count: int = DEFAULT_OPTION_COUNT,
    rng: random.Random | None = None,
) -> list[Breed]:
    """Pick distinct decoys for `correct` and shuffle them with it.

    Decoys are sampled without replacement from `breeds` minus `correct`
    (duplicates in `breeds` are ignored). With a small catalog the result
    degrades to every available breed.
    """

    rng = rng or random.Random()
    pool = list(dict.fromkeys(b for b in breeds if b != correct))
    decoys = rng.sample(pool, k=min(option_count - 1, len(pool)))
    options = [*decoys, correct]
    rng.shuffle(options)
    return options


class QuizEngine:
    """Round-based breed quiz.

    Args:
        catalog: breed list and image source.
        score_store: durable score counter; read once here, written on change.
        rng: randomness source (inject a seeded `random.Random` in tests).
        option_count: answer choices per question, correct one included.
        attempts_per_question: 1 for single-attempt rounds, 2 to allow one
            more try after a wrong answer.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        score_store: ScoreStore,
        *,
        rng: random.Random | None = None,
        option_count: int = DEFAULT_OPTION_COUNT,
        attempts_per_question: int = 1,
    ) -> None:
        if option_count < 2:
            raise ValueError("option_count must be at least 2")
        if attempts_per_question < 1:
            raise ValueError("attempts_per_question must be at least 1")

        self._catalog = catalog
        self._score_store = score_store
        self._rng = rng or random.Random()
        self._option_count = option_count
        self._attempts_per_question = attempts_per_question

        self._breeds: list[Breed] = []
        self._state: GameState = Idle()
        self._wrong_attempts = 0
        self._score = self._read_score()

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def breeds(self) -> tuple[Breed, ...]:
        return tuple(self._breeds)

    @property
    def has_breeds(self) -> bool:
        return bool(self._breeds)

    @property
    def question(self) -> Question | None:
        """Current question, if the state is `Loaded`."""

        if isinstance(self._state, Loaded):
            return self._state.question
        return None

    async def load_breeds_if_needed(self) -> None:
        if self._breeds:
            return

        self._set_state(Loading())
        try:
            breeds = await self._catalog.fetch_all_breeds()
            if not breeds:
                raise EmptyCatalog("catalog returned no breeds")
        except CatalogUnavailable as exc:
            logger.warning("Breed list unavailable: %s", exc)
            self._set_state(Failed(message=BREEDS_FAILED_MESSAGE))
            return
        except asyncio.CancelledError:
            self._set_state(Failed(message=BREEDS_FAILED_MESSAGE))
            raise

        self._breeds = sort_breeds(dict.fromkeys(breeds))
        logger.debug("Cached %d breeds", len(self._breeds))
        await self.advance()

    async def advance(self) -> None:
        if not self._breeds:
            self._set_state(Failed(message=BREEDS_FAILED_MESSAGE))
            return

        self._set_state(Loading())
        self._wrong_attempts = 0

        correct = self._rng.choice(self._breeds)
        options = build_options(
            self._breeds,
            correct,
            option_count=self._option_count,
            rng=self._rng,
        )

        try:
            image_url = await self._catalog.fetch_random_image(correct)
            question = Question(
                image_url=image_url,
                correct_breed=correct,
                options=tuple(options),
            )
        except (CatalogUnavailable, ValidationError) as exc:
            logger.warning("Image for %s unavailable: %s", correct.path_key, exc)
            self._set_state(Failed(message=IMAGE_FAILED_MESSAGE))
            return
        except asyncio.CancelledError:
            self._set_state(Failed(message=IMAGE_FAILED_MESSAGE))
            raise

        self._set_state(Loaded(question=question))

    async def retry(self) -> None:
        """Re-run whichever step failed: the breed list or the next question."""

        if self._breeds:
            await self.advance()
        else:
            await self.load_breeds_if_needed()

    def select_answer(self, breed: Breed) -> AnswerResult:
        question = self.question
        if question is None:
            return AnswerResult(outcome=AnswerOutcome.INVALID)

        correct = question.correct_breed
        if breed == correct:
            self._set_score(self._score + 1)
            return AnswerResult(outcome=AnswerOutcome.CORRECT, correct_breed=correct)

        self._wrong_attempts += 1
        if self._wrong_attempts < self._attempts_per_question:
            return AnswerResult(
                outcome=AnswerOutcome.INCORRECT_RETRY_ALLOWED,
                correct_breed=correct,
            )
        return AnswerResult(outcome=AnswerOutcome.INCORRECT, correct_breed=correct)

    def reset_score(self) -> None:
        self._set_score(0)

    def invalidate_cache(self) -> None:
        """Forget the cached breeds; the next load refetches them."""

        self._breeds = []

    def _set_state(self, state: GameState) -> None:
        logger.debug("State %s -> %s", self._state.kind, state.kind)
        self._state = state

    def _set_score(self, value: int) -> None:
        self._score = value
        try:
            self._score_store.write(value)
        except Exception as exc:
            logger.warning("Could not persist score %d: %s", value, exc)

    def _read_score(self) -> int:
        try:
            value = int(self._score_store.read())
        except Exception as exc:
            logger.warning("Could not read persisted score: %s", exc)
            return 0
        return max(0, value)
