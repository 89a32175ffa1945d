from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable

from ..models import SpaceName
from .entities import Reservation, parse_day, resolve_space

Clock = Callable[[], date]
ReservationSource = Callable[[], Iterable[Reservation]]


@dataclass(frozen=True)
class DayAvailability:
    date: date
    available: bool
    booked: bool
    past: bool


class AvailabilityIndex:
    """Answers whether a (space, date) pair can still be booked.

    Nothing is cached: every query reads the current reservations and asks the
    clock for today's date.
    """

    def __init__(self, reservations: ReservationSource, clock: Clock) -> None:
        self._reservations = reservations
        self._clock = clock

    def is_booked(self, space: str | SpaceName, day: str | date) -> bool:
        space_name = resolve_space(space)
        target = parse_day(day)
        return any(r.space_name == space_name and r.date == target for r in self._reservations())

    def is_past(self, day: str | date) -> bool:
        return parse_day(day) < self._clock()

    def is_available(self, space: str | SpaceName, day: str | date) -> bool:
        return not self.is_past(day) and not self.is_booked(space, day)

    def month_calendar(self, space: str | SpaceName, year: int, month: int) -> list[DayAvailability]:
        space_name = resolve_space(space)
        today = self._clock()
        booked = {r.date for r in self._reservations() if r.space_name == space_name}
        _, days_in_month = calendar.monthrange(year, month)
        days: list[DayAvailability] = []
        for day_number in range(1, days_in_month + 1):
            day = date(year, month, day_number)
            is_past = day < today
            is_booked = day in booked
            days.append(DayAvailability(date=day, available=not (is_past or is_booked), booked=is_booked, past=is_past))
        return days

    def unavailable_dates(self, space: str | SpaceName, year: int, month: int) -> list[date]:
        return [entry.date for entry in self.month_calendar(space, year, month) if not entry.available]
