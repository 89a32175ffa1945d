from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_state, get_today
from ..domain.entities import SPACES
from ..domain.errors import ValidationError
from ..domain.reports import format_year_month, parse_year_month
from ..models import SpaceName
from ..schemas import CalendarDay, SpaceCalendar, SpaceRead
from ..usecases.state import AppState

router = APIRouter(prefix="/spaces", tags=["spaces"])


@router.get("", response_model=List[SpaceRead])
async def list_spaces(state: AppState = Depends(get_state)) -> list[SpaceRead]:
    return [SpaceRead.from_domain(space=space, price=state.catalog.get_current_price(space.name)) for space in SPACES]


@router.get("/{space_name}/calendar", response_model=SpaceCalendar)
async def space_calendar(
    space_name: SpaceName,
    month: Optional[str] = Query(default=None, description="YYYY-MM, defaults to the current month"),
    state: AppState = Depends(get_state),
    today: date = Depends(get_today),
) -> SpaceCalendar:
    year_month = month or format_year_month(today)
    try:
        year, month_number = parse_year_month(year_month)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    days = state.store.availability.month_calendar(space_name, year, month_number)
    return SpaceCalendar(
        space_name=space_name,
        month=year_month,
        days=[CalendarDay.from_domain(entry) for entry in days],
    )
