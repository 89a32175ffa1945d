from __future__ import annotations

import bisect
import threading
import uuid
from datetime import date
from typing import Callable, Iterable

from ..models import ReservationStatus, SpaceName
from ..utils.time import today_in
from .availability import AvailabilityIndex, Clock
from .entities import Actor, Reservation, parse_day, resolve_space
from .errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .pricing import PriceCatalog


def generate_reservation_id() -> str:
    return uuid.uuid4().hex


class ReservationStore:
    """Authoritative, date-ordered collection of reservations.

    ``create`` checks availability and inserts under one lock, so two callers
    racing for the same (space, date) cannot both succeed. ``confirm`` and
    ``delete`` take the same lock.
    """

    def __init__(
        self,
        catalog: PriceCatalog,
        *,
        clock: Clock = today_in,
        id_factory: Callable[[], str] = generate_reservation_id,
    ) -> None:
        self.catalog = catalog
        self._id_factory = id_factory
        self._items: list[Reservation] = []
        self._lock = threading.Lock()
        self.availability = AvailabilityIndex(self.list, clock)

    @classmethod
    def restore(
        cls,
        reservations: Iterable[Reservation],
        catalog: PriceCatalog,
        *,
        clock: Clock = today_in,
        id_factory: Callable[[], str] = generate_reservation_id,
    ) -> "ReservationStore":
        """Rebuild a store from persisted reservations without availability checks.

        Past dates are allowed here; duplicated ids or (space, date) pairs are not.
        """
        store = cls(catalog, clock=clock, id_factory=id_factory)
        seen_ids: set[str] = set()
        seen_slots: set[tuple[SpaceName, date]] = set()
        for reservation in reservations:
            slot = (reservation.space_name, reservation.date)
            if reservation.id in seen_ids or slot in seen_slots:
                raise ValidationError(f"duplicate reservation in stored data: {reservation.id}")
            seen_ids.add(reservation.id)
            seen_slots.add(slot)
            bisect.insort(store._items, reservation, key=_by_date)
        return store

    def __len__(self) -> int:
        return len(self._items)

    def list(self) -> list[Reservation]:
        return list(self._items)

    def pending(self) -> list[Reservation]:
        return [r for r in self._items if r.status == ReservationStatus.PENDING]

    def find(self, reservation_id: str) -> Reservation | None:
        return next((r for r in self._items if r.id == reservation_id), None)

    def get(self, reservation_id: str) -> Reservation:
        reservation = self.find(reservation_id)
        if reservation is None:
            raise NotFoundError(f"reservation not found: {reservation_id}")
        return reservation

    def create(self, space: str | SpaceName, day: str | date, apartment: str) -> Reservation:
        try:
            space_name = resolve_space(space)
        except NotFoundError as exc:
            raise ValidationError(str(exc)) from exc
        apartment = (apartment or "").strip()
        if not apartment:
            raise ValidationError("apartment must not be empty")
        target = parse_day(day)

        with self._lock:
            if self.availability.is_past(target):
                raise ConflictError(f"{target.isoformat()} is in the past")
            if self.availability.is_booked(space_name, target):
                raise ConflictError(f"{space_name} is already booked on {target.isoformat()}")
            reservation = Reservation(
                id=self._id_factory(),
                space_name=space_name,
                date=target,
                apartment=apartment,
                status=ReservationStatus.PENDING,
                value=self.catalog.get_current_price(space_name),
            )
            if any(r.id == reservation.id for r in self._items):
                raise ConflictError(f"reservation id already in use: {reservation.id}")
            bisect.insort(self._items, reservation, key=_by_date)
        return reservation

    def confirm(self, reservation_id: str, *, actor: Actor) -> Reservation:
        confirmed, _ = self.confirm_with_previous(reservation_id, actor=actor)
        return confirmed

    def confirm_with_previous(
        self, reservation_id: str, *, actor: Actor
    ) -> tuple[Reservation, ReservationStatus]:
        """Confirm and also return the status read under the same lock."""
        _require_admin(actor, "confirm reservations")
        with self._lock:
            index = self._index_of(reservation_id)
            previous = self._items[index].status
            confirmed = self._items[index].confirmed()
            self._items[index] = confirmed
        return confirmed, previous

    def delete(self, reservation_id: str, *, actor: Actor) -> Reservation:
        _require_admin(actor, "delete reservations")
        with self._lock:
            index = self._index_of(reservation_id)
            return self._items.pop(index)

    def _index_of(self, reservation_id: str) -> int:
        for index, reservation in enumerate(self._items):
            if reservation.id == reservation_id:
                return index
        raise NotFoundError(f"reservation not found: {reservation_id}")


def _by_date(reservation: Reservation) -> date:
    return reservation.date


def _require_admin(actor: Actor, action: str) -> None:
    if not actor.is_admin:
        raise AuthorizationError(f"only the administrator can {action}")
