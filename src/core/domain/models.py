"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Frozen models give us immutable, hashable value types with structural
  equality, which is exactly what the quiz needs for breeds and questions.
- Validation lives at construction time, so an invalid `Question` can never
  reach the presentation layer.

Note:
- These models describe *what* the quiz is made of, not *how* it is fetched.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Iterable, Literal, Mapping, Union
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

_WHITESPACE = re.compile(r"(\s+)")


def title_case(value: str) -> str:
    """Capitalize every whitespace-delimited word, lower-casing the rest."""

    return "".join(part.capitalize() for part in _WHITESPACE.split(value))


class Breed(BaseModel):
    """A breed or sub-breed from the remote catalog.

    For sub-breeds, `parent` is the main breed and `sub_name` the sub-breed
    (e.g. `Breed(parent="bulldog", sub_name="french")`).
    """

    model_config = ConfigDict(frozen=True)

    parent: str = Field(
        ...,
        min_length=1,
        description="Lower-case taxonomy key of the main breed.",
    )
    sub_name: str | None = Field(
        default=None,
        description="Sub-breed key; empty strings are treated as absent.",
    )

    @field_validator("sub_name", mode="before")
    @classmethod
    def _empty_sub_name_is_absent(cls, value: object) -> object:
        if isinstance(value, str) and not value:
            return None
        return value

    @property
    def display_name(self) -> str:
        """UI label, e.g. "Bulldog (French)" or "Akita"."""

        return display_name(self)

    @property
    def path_key(self) -> str:
        """Catalog address, e.g. "bulldog/french" or "akita"."""

        return path_key(self)

    def __str__(self) -> str:
        return self.display_name


def display_name(breed: Breed) -> str:
    if breed.sub_name:
        return f"{title_case(breed.parent)} ({title_case(breed.sub_name)})"
    return title_case(breed.parent)


def path_key(breed: Breed) -> str:
    if breed.sub_name:
        return f"{breed.parent}/{breed.sub_name}"
    return breed.parent


def sort_breeds(breeds: Iterable[Breed]) -> list[Breed]:
    """Return a new list ordered by display name (ascending)."""

    return sorted(breeds, key=lambda breed: breed.display_name)


def breeds_from_taxonomy(taxonomy: Mapping[str, Iterable[str]]) -> list[Breed]:
    """Flatten a `{parent: [sub, ...]}` map into sorted breeds.

    A parent without sub-breeds yields a single `Breed(parent)`; a parent with
    sub-breeds yields one entry per sub-breed and no bare parent entry.
    """

    out: list[Breed] = []
    for parent, subs in taxonomy.items():
        sub_list = [s for s in subs if s]
        if not sub_list:
            out.append(Breed(parent=parent))
            continue
        out.extend(Breed(parent=parent, sub_name=sub) for sub in sub_list)
    return sort_breeds(out)


class Question(BaseModel):
    """One quiz round: an image and the options to pick from.

    `options` keeps the on-screen order and is fixed for the round.
    """

    model_config = ConfigDict(frozen=True)

    image_url: str = Field(
        ...,
        min_length=1,
        description="Absolute http(s) URL of the breed image.",
    )
    correct_breed: Breed = Field(
        ...,
        description="The breed shown in the image.",
    )
    options: tuple[Breed, ...] = Field(
        ...,
        min_length=1,
        description="Distinct answer choices, in display order.",
    )

    @field_validator("image_url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        if not is_absolute_http_url(value):
            raise ValueError(f"image_url must be an absolute http(s) URL, got {value!r}")
        return value

    @model_validator(mode="after")
    def _options_are_consistent(self) -> "Question":
        if len(set(self.options)) != len(self.options):
            raise ValueError("options must be distinct")
        if self.options.count(self.correct_breed) != 1:
            raise ValueError("options must contain the correct breed exactly once")
        return self

    def index_of(self, breed: Breed) -> int | None:
        try:
            return self.options.index(breed)
        except ValueError:
            return None


def is_absolute_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class Idle(BaseModel):
    """Initial state: nothing requested yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class Loading(BaseModel):
    """A catalog fetch is outstanding."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"


class Loaded(BaseModel):
    """A question is ready to be answered."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["loaded"] = "loaded"
    question: Question


class Failed(BaseModel):
    """The last fetch failed; `message` is shown to the player."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    message: str = Field(..., min_length=1)


GameState = Annotated[
    Union[Idle, Loading, Loaded, Failed],
    Field(discriminator="kind"),
]


class AnswerOutcome(str, Enum):
    """Result of evaluating a player's choice."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    INCORRECT_RETRY_ALLOWED = "incorrect_retry_allowed"
    INVALID = "invalid"


class AnswerResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: AnswerOutcome
    correct_breed: Breed | None = Field(
        default=None,
        description="Present for every outcome except INVALID.",
    )

    @property
    def is_correct(self) -> bool:
        return self.outcome is AnswerOutcome.CORRECT

    @property
    def is_final(self) -> bool:
        """True once the round is decided (correct or out of attempts)."""

        return self.outcome in (AnswerOutcome.CORRECT, AnswerOutcome.INCORRECT)
