from urllib.parse import quote

from ..domain.entities import Reservation
from .time import format_br_date


def format_receipt_message(reservation: Reservation) -> str:
    return (
        "Olá! Segue o comprovante de pagamento para a reserva do espaço "
        f'"{reservation.space_name}" no dia {format_br_date(reservation.date)}, '
        f"para o apartamento {reservation.apartment}."
    )


def build_whatsapp_link(number: str, message: str) -> str:
    """Deep link that opens a chat with `number` prefilled with `message`."""
    digits = "".join(ch for ch in number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"
