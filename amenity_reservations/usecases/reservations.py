from datetime import date

from ..domain.entities import Actor, Reservation
from ..domain.errors import ConflictError
from ..domain.reports import filter_by_month
from ..models import ReservationStatus, SpaceName
from ..utils.messaging import build_whatsapp_link, format_receipt_message
from .state import AppState, persist_reservations


async def create_reservation(
    state: AppState,
    *,
    space: str | SpaceName,
    day: str | date,
    apartment: str,
) -> Reservation:
    reservation = state.store.create(space, day, apartment)
    await persist_reservations(state)
    return reservation


async def confirm_reservation(
    state: AppState,
    *,
    reservation_id: str,
    actor: Actor,
) -> tuple[Reservation, ReservationStatus]:
    """Confirm payment. Returns the reservation and the status it had before."""
    confirmed, previous = state.store.confirm_with_previous(reservation_id, actor=actor)
    # Idempotent: already confirmed means nothing changed, nothing to save
    if previous != confirmed.status:
        await persist_reservations(state)
    return confirmed, previous


async def delete_reservation(
    state: AppState,
    *,
    reservation_id: str,
    actor: Actor,
) -> Reservation:
    removed = state.store.delete(reservation_id, actor=actor)
    await persist_reservations(state)
    return removed


def list_reservations(state: AppState, *, year_month: str | None = None) -> list[Reservation]:
    reservations = state.store.list()
    if year_month:
        return filter_by_month(reservations, year_month)
    return reservations


def receipt_link(state: AppState, *, reservation_id: str, whatsapp_number: str) -> tuple[str, str]:
    """Return the payment receipt message and the deep link that sends it."""
    reservation = state.store.get(reservation_id)
    if not reservation.is_pending:
        raise ConflictError("reservation is already confirmed")
    message = format_receipt_message(reservation)
    return message, build_whatsapp_link(whatsapp_number, message)
