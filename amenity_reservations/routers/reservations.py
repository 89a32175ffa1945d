from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from ..config import Settings, get_settings
from ..deps import get_actor, get_state
from ..domain.entities import Actor
from ..domain.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..schemas import ReceiptLink, ReservationCreate, ReservationRead
from ..usecases import reservations as reservation_usecase
from ..usecases.state import AppState
from ..utils.audit_log import emit_audit_log

router = APIRouter(prefix="/reservations", tags=["reservations"])


def _audit(**kwargs: Any) -> None:
    try:
        emit_audit_log(**kwargs)
    except RuntimeError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed") from exc


@router.get("", response_model=List[ReservationRead])
async def list_reservations(
    month: Optional[str] = Query(default=None, description="YYYY-MM"),
    state: AppState = Depends(get_state),
) -> list[ReservationRead]:
    try:
        rows = reservation_usecase.list_reservations(state, year_month=month)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return [ReservationRead.from_domain(r) for r in rows]


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: ReservationCreate,
    state: AppState = Depends(get_state),
) -> ReservationRead:
    try:
        reservation = await reservation_usecase.create_reservation(
            state,
            space=payload.space_name,
            day=payload.date,
            apartment=payload.apartment,
        )
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    _audit(
        action="reservation.created",
        initiator="resident",
        reservation_id=reservation.id,
        space_name=reservation.space_name,
        day=reservation.date,
        apartment=reservation.apartment,
        status_to=reservation.status,
        value=reservation.value,
    )
    return ReservationRead.from_domain(reservation)


@router.get("/{reservation_id}/receipt-link", response_model=ReceiptLink)
async def receipt_link(
    reservation_id: str = Path(..., min_length=1),
    state: AppState = Depends(get_state),
    settings: Settings = Depends(get_settings),
) -> ReceiptLink:
    try:
        message, url = reservation_usecase.receipt_link(
            state,
            reservation_id=reservation_id,
            whatsapp_number=settings.admin_whatsapp_number,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found") from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return ReceiptLink(reservation_id=reservation_id, message=message, url=url)


@router.post("/{reservation_id}/confirm", response_model=ReservationRead)
async def confirm_reservation(
    reservation_id: str = Path(..., min_length=1),
    state: AppState = Depends(get_state),
    actor: Actor = Depends(get_actor),
) -> ReservationRead:
    try:
        reservation, previous = await reservation_usecase.confirm_reservation(
            state,
            reservation_id=reservation_id,
            actor=actor,
        )
    except AuthorizationError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found") from exc

    if previous != reservation.status:
        _audit(
            action="reservation.confirmed",
            initiator="admin",
            reservation_id=reservation.id,
            space_name=reservation.space_name,
            day=reservation.date,
            status_from=previous,
            status_to=reservation.status,
            value=reservation.value,
        )
    return ReservationRead.from_domain(reservation)


@router.delete("/{reservation_id}", response_model=ReservationRead)
async def delete_reservation(
    reservation_id: str = Path(..., min_length=1),
    state: AppState = Depends(get_state),
    actor: Actor = Depends(get_actor),
) -> ReservationRead:
    try:
        removed = await reservation_usecase.delete_reservation(state, reservation_id=reservation_id, actor=actor)
    except AuthorizationError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found") from exc

    _audit(
        action="reservation.deleted",
        initiator="admin",
        reservation_id=removed.id,
        space_name=removed.space_name,
        day=removed.date,
        apartment=removed.apartment,
        status_from=removed.status,
        value=removed.value,
    )
    return ReservationRead.from_domain(removed)
