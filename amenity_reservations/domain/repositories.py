from __future__ import annotations

from typing import Protocol

RESERVATIONS_KEY = "reservations"
PRICES_KEY = "prices"


class KeyValueStore(Protocol):
    """Persists serialized records by key. Failures raise PersistenceError."""

    async def load(self, key: str) -> str | None: ...

    async def save(self, key: str, value: str) -> None: ...
