from datetime import date
from decimal import Decimal

import pytest
from amenity_reservations.domain.availability import AvailabilityIndex
from amenity_reservations.domain.entities import Reservation
from amenity_reservations.domain.errors import NotFoundError
from amenity_reservations.models import ReservationStatus, SpaceName


def _reservation(day: date, space: SpaceName = SpaceName.CHURRASQUEIRA) -> Reservation:
    return Reservation(
        id=f"{space}-{day}",
        space_name=space,
        date=day,
        apartment="101",
        status=ReservationStatus.CONFIRMED,
        value=Decimal("75.00"),
    )


def _index(reservations: list[Reservation], today: date = date(2024, 3, 10)) -> AvailabilityIndex:
    return AvailabilityIndex(lambda: reservations, lambda: today)


def test_free_future_date_is_available() -> None:
    index = _index([])
    assert index.is_available(SpaceName.CHURRASQUEIRA, date(2024, 3, 11))
    assert index.is_available("Salão de Festas", "2024-03-10")


def test_past_date_is_unavailable() -> None:
    index = _index([])
    assert not index.is_available(SpaceName.CHURRASQUEIRA, date(2024, 3, 9))


def test_booked_date_is_unavailable_only_for_that_space() -> None:
    index = _index([_reservation(date(2024, 3, 15))])
    assert not index.is_available(SpaceName.CHURRASQUEIRA, "2024-03-15")
    assert index.is_available(SpaceName.SALAO_DE_FESTAS, "2024-03-15")


def test_reads_current_reservations_on_every_query() -> None:
    reservations: list[Reservation] = []
    index = _index(reservations)
    assert index.is_available(SpaceName.CHURRASQUEIRA, "2024-03-15")
    reservations.append(_reservation(date(2024, 3, 15)))
    assert not index.is_available(SpaceName.CHURRASQUEIRA, "2024-03-15")


def test_clock_is_read_at_evaluation_time() -> None:
    today = [date(2024, 3, 10)]
    index = AvailabilityIndex(lambda: [], lambda: today[0])
    assert index.is_available(SpaceName.CHURRASQUEIRA, "2024-03-12")
    today[0] = date(2024, 3, 13)
    assert not index.is_available(SpaceName.CHURRASQUEIRA, "2024-03-12")


def test_unknown_space_raises() -> None:
    with pytest.raises(NotFoundError):
        _index([]).is_available("Piscina", "2024-03-12")


def test_month_calendar_marks_past_and_booked_days() -> None:
    index = _index([_reservation(date(2024, 3, 15))])
    days = index.month_calendar(SpaceName.CHURRASQUEIRA, 2024, 3)

    assert len(days) == 31
    by_day = {entry.date.day: entry for entry in days}
    assert by_day[9].past and not by_day[9].available
    assert by_day[10].available
    assert by_day[15].booked and not by_day[15].available
    assert by_day[16].available


def test_unavailable_dates_for_leap_february() -> None:
    index = _index([_reservation(date(2024, 2, 29))], today=date(2024, 2, 27))
    blocked = index.unavailable_dates(SpaceName.CHURRASQUEIRA, 2024, 2)
    assert blocked[-1] == date(2024, 2, 29)
    assert date(2024, 2, 28) not in blocked
    assert len(blocked) == 27
