"""JSON codec for the two persisted records: the reservation list and the price map."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..domain.entities import Reservation
from ..domain.errors import ValidationError
from ..models import ReservationStatus, SpaceName

# Status labels written by the first browser-only version of the app.
_LEGACY_STATUS = {
    "Pendente": ReservationStatus.PENDING,
    "Confirmado": ReservationStatus.CONFIRMED,
}


class ReservationRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    space_name: SpaceName = Field(alias="spaceName")
    date: dt.date
    apartment: str = Field(min_length=1)
    status: ReservationStatus
    value: Decimal = Field(ge=0)

    @field_validator("status", mode="before")
    @classmethod
    def _legacy_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _LEGACY_STATUS.get(value, value)
        return value

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationRecord":
        return cls(
            id=reservation.id,
            space_name=reservation.space_name,
            date=reservation.date,
            apartment=reservation.apartment,
            status=reservation.status,
            value=reservation.value,
        )

    def to_domain(self) -> Reservation:
        return Reservation(
            id=self.id,
            space_name=self.space_name,
            date=self.date,
            apartment=self.apartment,
            status=self.status,
            value=self.value,
        )


_reservations_adapter = TypeAdapter(list[ReservationRecord])
_prices_adapter = TypeAdapter(dict[SpaceName, Decimal])


def dump_reservations(reservations: Iterable[Reservation]) -> str:
    records = [ReservationRecord.from_domain(r) for r in reservations]
    return _reservations_adapter.dump_json(records, by_alias=True).decode("utf-8")


def parse_reservations(raw: str) -> list[Reservation]:
    try:
        records = _reservations_adapter.validate_json(raw)
    except PydanticValidationError as exc:
        raise ValidationError("stored reservations are malformed") from exc
    return [record.to_domain() for record in records]


def dump_prices(prices: Mapping[SpaceName, Decimal]) -> str:
    return _prices_adapter.dump_json(dict(prices)).decode("utf-8")


def parse_prices(raw: str) -> dict[SpaceName, Decimal]:
    try:
        return _prices_adapter.validate_json(raw)
    except PydanticValidationError as exc:
        raise ValidationError("stored prices are malformed") from exc
