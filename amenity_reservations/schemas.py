from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from .domain.availability import DayAvailability
from .domain.entities import Reservation, Space
from .domain.reports import MonthlySummary, MonthOption
from .models import ReservationStatus, SpaceName
from .utils.time import format_br_date


class SpaceRead(BaseModel):
    id: int
    name: SpaceName
    capacity: int
    features: list[str]
    price: Decimal

    @field_serializer("price")
    def _ser_price(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @classmethod
    def from_domain(cls, *, space: Space, price: Decimal) -> "SpaceRead":
        return cls(id=space.id, name=space.name, capacity=space.capacity, features=list(space.features), price=price)


class CalendarDay(BaseModel):
    date: date
    available: bool
    booked: bool
    past: bool

    @classmethod
    def from_domain(cls, entry: DayAvailability) -> "CalendarDay":
        return cls(date=entry.date, available=entry.available, booked=entry.booked, past=entry.past)


class SpaceCalendar(BaseModel):
    space_name: SpaceName
    month: str
    days: list[CalendarDay]


class ReservationCreate(BaseModel):
    space_name: SpaceName
    date: date
    apartment: str = Field(min_length=1, max_length=50)


class ReservationRead(BaseModel):
    reservation_id: str
    space_name: SpaceName
    date: date
    date_display: str
    apartment: str
    status: ReservationStatus
    value: Decimal

    @field_serializer("value")
    def _ser_value(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationRead":
        return cls(
            reservation_id=reservation.id,
            space_name=reservation.space_name,
            date=reservation.date,
            date_display=format_br_date(reservation.date),
            apartment=reservation.apartment,
            status=reservation.status,
            value=reservation.value,
        )


class ReceiptLink(BaseModel):
    reservation_id: str
    message: str
    url: str


class AdminLogin(BaseModel):
    password: str


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PriceUpdate(BaseModel):
    prices: dict[SpaceName, Decimal | str] = Field(min_length=1)


class PricesRead(BaseModel):
    prices: dict[SpaceName, Decimal]

    @field_serializer("prices")
    def _ser_prices(self, prices: dict[SpaceName, Decimal]) -> dict[str, str]:
        return {str(name): f"{value:.2f}" for name, value in prices.items()}


class MonthlySummaryRead(BaseModel):
    month: str
    total: int
    confirmed_count: int
    pending_count: int
    revenue: Decimal

    @field_serializer("revenue")
    def _ser_revenue(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @classmethod
    def from_domain(cls, summary: MonthlySummary) -> "MonthlySummaryRead":
        return cls(
            month=summary.year_month,
            total=summary.total,
            confirmed_count=summary.confirmed_count,
            pending_count=summary.pending_count,
            revenue=summary.revenue,
        )


class MonthOptionRead(BaseModel):
    value: str
    label: str

    @classmethod
    def from_domain(cls, option: MonthOption) -> "MonthOptionRead":
        return cls(value=option.value, label=option.label)


class PaymentInfo(BaseModel):
    pix_key: str
    pix_key_raw: str
    company_name: str
    note: Optional[str] = None
