from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..models import ReservationStatus
from ..utils.time import month_label
from .entities import Reservation
from .errors import ValidationError

_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class MonthlySummary:
    year_month: str
    total: int
    confirmed_count: int
    pending_count: int
    revenue: Decimal


@dataclass(frozen=True)
class MonthOption:
    value: str
    label: str


def parse_year_month(year_month: str) -> tuple[int, int]:
    match = _YEAR_MONTH.match(year_month or "")
    if match is None:
        raise ValidationError(f"invalid year-month: {year_month!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not date.min.year <= year <= date.max.year:
        raise ValidationError(f"invalid year: {year_month!r}")
    if not 1 <= month <= 12:
        raise ValidationError(f"invalid month: {year_month!r}")
    return year, month


def format_year_month(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def filter_by_month(reservations: Iterable[Reservation], year_month: str) -> list[Reservation]:
    year, month = parse_year_month(year_month)
    return [r for r in reservations if r.date.year == year and r.date.month == month]


def summarize(reservations: Iterable[Reservation], year_month: str) -> MonthlySummary:
    in_month = filter_by_month(reservations, year_month)
    confirmed = [r for r in in_month if r.status == ReservationStatus.CONFIRMED]
    pending = [r for r in in_month if r.status == ReservationStatus.PENDING]
    return MonthlySummary(
        year_month=year_month,
        total=len(in_month),
        confirmed_count=len(confirmed),
        pending_count=len(pending),
        revenue=sum((r.value for r in confirmed), Decimal("0.00")),
    )


def month_options(today: date, *, before: int = 6, after: int = 5) -> list[MonthOption]:
    """Months offered by the report filter, from `before` months ago to `after` months ahead."""
    options: list[MonthOption] = []
    for offset in range(-before, after + 1):
        index = today.year * 12 + (today.month - 1) + offset
        year, month = divmod(index, 12)
        options.append(MonthOption(value=f"{year:04d}-{month + 1:02d}", label=month_label(year, month + 1)))
    return options
