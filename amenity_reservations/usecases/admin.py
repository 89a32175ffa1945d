from datetime import date
from decimal import Decimal
from typing import Mapping

from ..domain.entities import Actor
from ..domain.reports import MonthlySummary, MonthOption, format_year_month, month_options, summarize
from ..models import SpaceName
from .state import AppState, persist_prices


async def update_prices(
    state: AppState,
    *,
    prices: Mapping[str | SpaceName, object],
    actor: Actor,
) -> dict[SpaceName, Decimal]:
    updated = state.catalog.set_prices(prices, actor=actor)
    await persist_prices(state)
    return updated


def monthly_summary(state: AppState, *, today: date, year_month: str | None = None) -> MonthlySummary:
    return summarize(state.store.list(), year_month or format_year_month(today))


def report_months(today: date) -> list[MonthOption]:
    return month_options(today)
