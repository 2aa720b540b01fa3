"""Breed catalog contract.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- The engine depends on these two operations only; HTTP adapters and test
  fakes are interchangeable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Breed


@runtime_checkable
class CatalogSource(Protocol):
    """Minimal contract for a breed catalog.

    Design rules:
    - Both operations are asynchronous because they typically do I/O (HTTP).
    - Failures are reported as `core.domain.errors.CatalogUnavailable`.
    """

    async def fetch_all_breeds(self) -> list[Breed]:
        """Return every breed the catalog knows about.

        May be empty only if the remote catalog is genuinely empty.
        """

        ...

    async def fetch_random_image(self, breed: Breed) -> str:
        """Return an absolute URL of a random image of `breed`."""

        ...
