from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

LOCAL_TZ = ZoneInfo("America/Sao_Paulo")

PT_BR_MONTHS = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def today_in(tz: ZoneInfo = LOCAL_TZ) -> date:
    return datetime.now(timezone.utc).astimezone(tz).date()


def format_br_date(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def month_label(year: int, month: int) -> str:
    label = f"{PT_BR_MONTHS[month - 1]} de {year}"
    return label[0].upper() + label[1:]
