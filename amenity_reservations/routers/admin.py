from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import Settings, get_settings
from ..deps import get_actor, get_admin_gate, get_state, get_today, require_admin
from ..domain.entities import Actor
from ..domain.errors import AuthorizationError, ValidationError
from ..schemas import AccessToken, AdminLogin, MonthlySummaryRead, MonthOptionRead, PricesRead, PriceUpdate, ReservationRead
from ..usecases import admin as admin_usecase
from ..usecases.state import AppState
from ..utils.audit_log import emit_audit_log
from ..utils.auth import AdminGate, create_access_token

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=AccessToken)
async def login(
    payload: AdminLogin,
    gate: AdminGate = Depends(get_admin_gate),
    settings: Settings = Depends(get_settings),
) -> AccessToken:
    if not gate.authenticate(payload.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="incorrect password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    ttl = timedelta(minutes=settings.access_token_minutes)
    token = create_access_token(
        subject="admin",
        secret=settings.auth_secret,
        algorithm=settings.auth_algorithm,
        expires_delta=ttl,
    )
    return AccessToken(access_token=token, expires_in=int(ttl.total_seconds()))


@router.get("/prices", response_model=PricesRead, dependencies=[Depends(require_admin)])
async def get_prices(state: AppState = Depends(get_state)) -> PricesRead:
    return PricesRead(prices=state.catalog.as_dict())


@router.put("/prices", response_model=PricesRead)
async def update_prices(
    payload: PriceUpdate,
    state: AppState = Depends(get_state),
    actor: Actor = Depends(get_actor),
) -> PricesRead:
    previous = state.catalog.as_dict()
    try:
        updated = await admin_usecase.update_prices(state, prices=payload.prices, actor=actor)
    except AuthorizationError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    try:
        emit_audit_log(
            action="prices.updated",
            initiator="admin",
            extra={
                "prices_from": {str(k): f"{v:.2f}" for k, v in previous.items()},
                "prices_to": {str(k): f"{v:.2f}" for k, v in updated.items()},
            },
        )
    except RuntimeError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed") from exc
    return PricesRead(prices=updated)


@router.get("/summary", response_model=MonthlySummaryRead, dependencies=[Depends(require_admin)])
async def monthly_summary(
    month: Optional[str] = Query(default=None, description="YYYY-MM, defaults to the current month"),
    state: AppState = Depends(get_state),
    today: date = Depends(get_today),
) -> MonthlySummaryRead:
    try:
        summary = admin_usecase.monthly_summary(state, today=today, year_month=month)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return MonthlySummaryRead.from_domain(summary)


@router.get("/pending", response_model=List[ReservationRead], dependencies=[Depends(require_admin)])
async def pending_reservations(state: AppState = Depends(get_state)) -> list[ReservationRead]:
    return [ReservationRead.from_domain(r) for r in state.store.pending()]


@router.get("/months", response_model=List[MonthOptionRead])
async def report_months(today: date = Depends(get_today)) -> list[MonthOptionRead]:
    return [MonthOptionRead.from_domain(option) for option in admin_usecase.report_months(today)]
