"""Score persistence contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ScoreStore(Protocol):
    """Durable integer counter.

    `read` is called once when the engine is built; `write` on every score
    change. Implementations may raise `ScoreStoreError`; the engine treats
    writes as best effort.
    """

    def read(self) -> int:
        ...

    def write(self, value: int) -> None:
        ...
