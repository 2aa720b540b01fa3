"""
Shared fixtures: in-memory collaborators for the quiz engine.

All tests here are:
- Fast (no network, no real config dir)
- Deterministic (seeded randomness)
"""

import random

import pytest

from adapters.score_store import MemoryScoreStore
from core.domain.errors import CatalogUnavailable, ScoreStoreError
from core.domain.models import Breed

SAMPLE_BREEDS = [
    Breed(parent="bulldog"),
    Breed(parent="bulldog", sub_name="french"),
    Breed(parent="retriever", sub_name="golden"),
    Breed(parent="shepherd", sub_name="german"),
]

IMAGE_URL = "https://images.dog.ceo/breeds/test/dog.jpg"


class FakeCatalog:
    """CatalogSource double that records calls and can be told to fail."""

    def __init__(self, breeds=None, *, fail_breeds=False, fail_image=False, image_url=IMAGE_URL):
        self.breeds = list(SAMPLE_BREEDS if breeds is None else breeds)
        self.fail_breeds = fail_breeds
        self.fail_image = fail_image
        self.image_url = image_url
        self.breed_calls = 0
        self.image_calls = []

    async def fetch_all_breeds(self):
        self.breed_calls += 1
        if self.fail_breeds:
            raise CatalogUnavailable("breeds down")
        return list(self.breeds)

    async def fetch_random_image(self, breed):
        self.image_calls.append(breed)
        if self.fail_image:
            raise CatalogUnavailable("images down")
        return self.image_url


class BrokenScoreStore:
    """ScoreStore whose every operation fails."""

    def __init__(self):
        self.write_attempts = 0

    def read(self):
        raise ScoreStoreError("cannot read")

    def write(self, value):
        self.write_attempts += 1
        raise ScoreStoreError("cannot write")


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def rng():
    return random.Random(1234)
