"""Breed catalog: Dog CEO API.

Endpoints:
- `GET {base}/breeds/list/all`            -> {"message": {parent: [subs]}, "status": "success"}
- `GET {base}/breed/{path}/images/random` -> {"message": "<url>", "status": "success"}

Every transport, status or schema problem is reported as `CatalogUnavailable`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import CatalogUnavailable
from core.domain.models import Breed, breeds_from_taxonomy, is_absolute_http_url
from core.interfaces.catalog import CatalogSource

logger = logging.getLogger(__name__)

_PayloadT = TypeVar("_PayloadT", bound="_DogApiPayload")


class _DogApiPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = Field(default="success")


class BreedListPayload(_DogApiPayload):
    message: dict[str, list[str]] = Field(default_factory=dict)


class RandomImagePayload(_DogApiPayload):
    message: str = Field(..., min_length=1)


class DogApiCatalog(CatalogSource):
    """`CatalogSource` backed by https://dog.ceo/api.

    Owns its `httpx.AsyncClient` unless one is passed in; use it as an async
    context manager (or call `aclose`) to release connections.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._base_url = self._settings.catalog_base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> "DogApiCatalog":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_all_breeds(self) -> list[Breed]:
        payload = await self._get(f"{self._base_url}/breeds/list/all", BreedListPayload)
        breeds = breeds_from_taxonomy(payload.message)
        logger.debug("Catalog listed %d breeds", len(breeds))
        return breeds

    async def fetch_random_image(self, breed: Breed) -> str:
        url = f"{self._base_url}/breed/{breed.path_key}/images/random"
        payload = await self._get(url, RandomImagePayload)
        image_url = payload.message.strip()
        if not is_absolute_http_url(image_url):
            raise CatalogUnavailable(f"Catalog returned an invalid image URL: {image_url!r}")
        return image_url

    async def _get(self, url: str, model: type[_PayloadT]) -> _PayloadT:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPError as exc:
            raise CatalogUnavailable(f"GET {url} failed: {exc}") from exc
        except ValueError as exc:
            raise CatalogUnavailable(f"GET {url} returned invalid JSON") from exc

        try:
            payload = model.model_validate(data)
        except ValidationError as exc:
            raise CatalogUnavailable(f"GET {url} returned an unexpected payload") from exc

        if payload.status != "success":
            raise CatalogUnavailable(f"GET {url} reported status {payload.status!r}")
        return payload
