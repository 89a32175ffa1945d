from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal

from ..models import ReservationStatus, SpaceName
from .errors import NotFoundError, ValidationError


@dataclass(frozen=True)
class Space:
    id: int
    name: SpaceName
    capacity: int
    features: tuple[str, ...] = field(default_factory=tuple)


SPACES: tuple[Space, ...] = (
    Space(
        id=1,
        name=SpaceName.SALAO_DE_FESTAS,
        capacity=45,
        features=("Mesas e cadeiras", "Ar condicionado"),
    ),
    Space(
        id=2,
        name=SpaceName.CHURRASQUEIRA,
        capacity=30,
        features=("Churrasqueira a carvão", "Pia e bancada", "Mesas ao ar livre", "Área coberta"),
    ),
)


@dataclass(frozen=True)
class Reservation:
    id: str
    space_name: SpaceName
    date: date
    apartment: str
    status: ReservationStatus
    value: Decimal

    @property
    def is_pending(self) -> bool:
        return self.status == ReservationStatus.PENDING

    def confirmed(self) -> "Reservation":
        if self.status == ReservationStatus.CONFIRMED:
            return self
        return replace(self, status=ReservationStatus.CONFIRMED)


@dataclass(frozen=True)
class Actor:
    """Caller identity threaded through admin-only operations."""

    name: str
    is_admin: bool = False


RESIDENT = Actor(name="resident")
ADMIN = Actor(name="admin", is_admin=True)


def resolve_space(name: str | SpaceName) -> SpaceName:
    try:
        return SpaceName(name)
    except ValueError as exc:
        raise NotFoundError(f"unknown space: {name!r}") from exc


def parse_day(value: str | date) -> date:
    """Accept a date or its canonical ``YYYY-MM-DD`` text."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"invalid date: {value!r}") from exc
