from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from ..domain.availability import Clock
from ..domain.errors import PersistenceError, ValidationError
from ..domain.pricing import PriceCatalog
from ..domain.repositories import PRICES_KEY, RESERVATIONS_KEY, KeyValueStore
from ..domain.store import ReservationStore
from ..infrastructure.records import dump_prices, dump_reservations, parse_prices, parse_reservations
from ..utils.time import today_in

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AppState:
    store: ReservationStore
    kv: KeyValueStore

    @property
    def catalog(self) -> PriceCatalog:
        return self.store.catalog


async def load_state(kv: KeyValueStore, *, clock: Clock = today_in) -> AppState:
    """Build the in-memory state from persisted records, falling back to defaults."""
    prices = await _load_record(kv, PRICES_KEY, parse_prices)
    catalog = PriceCatalog()
    if prices is not None:
        try:
            catalog = PriceCatalog(prices)
        except ValidationError:
            logger.warning("stored prices rejected, using defaults", exc_info=True)

    store = ReservationStore(catalog, clock=clock)
    reservations = await _load_record(kv, RESERVATIONS_KEY, parse_reservations)
    if reservations is not None:
        try:
            store = ReservationStore.restore(reservations, catalog, clock=clock)
        except ValidationError:
            logger.warning("stored reservations rejected, starting empty", exc_info=True)
    logger.info("state loaded: %d reservations", len(store))
    return AppState(store=store, kv=kv)


async def persist_reservations(state: AppState) -> bool:
    """Write-behind save of the reservation list. Returns False if the save failed."""
    return await _save_record(state.kv, RESERVATIONS_KEY, dump_reservations(state.store.list()))


async def persist_prices(state: AppState) -> bool:
    return await _save_record(state.kv, PRICES_KEY, dump_prices(state.catalog.as_dict()))


async def _load_record(kv: KeyValueStore, key: str, parse: Callable[[str], T]) -> T | None:
    try:
        raw = await kv.load(key)
    except PersistenceError:
        logger.warning("could not read %s, using defaults", key, exc_info=True)
        return None
    if raw is None:
        return None
    try:
        return parse(raw)
    except ValidationError:
        logger.warning("could not parse %s, using defaults", key, exc_info=True)
        return None


async def _save_record(kv: KeyValueStore, key: str, value: str) -> bool:
    # In-memory state stays authoritative; a failed save is logged, not rolled back.
    try:
        await kv.save(key, value)
    except PersistenceError:
        logger.error("failed to persist %s", key, exc_info=True)
        return False
    return True
