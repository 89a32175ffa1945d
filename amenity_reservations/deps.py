from datetime import date
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException, Request, status

from .config import Settings, get_settings
from .domain.entities import RESIDENT, Actor
from .usecases.state import AppState
from .utils.auth import ADMIN_ROLE, AdminGate, decode_access_token
from .utils.time import today_in


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_state(request: Request) -> AppState:
    state = getattr(request.app.state, "reservations", None)
    if state is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="state not loaded")
    return state


def get_today(settings: Settings = Depends(get_settings)) -> date:
    return today_in(ZoneInfo(settings.local_timezone))


def get_admin_gate(settings: Settings = Depends(get_settings)) -> AdminGate:
    return AdminGate(settings.admin_password)


async def get_actor(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> Actor:
    """Residents need no credentials; a bearer token identifies the administrator."""
    if authorization is None:
        return RESIDENT
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Bearer token required")
    try:
        subject, role = decode_access_token(token, secret=settings.auth_secret, algorithms=[settings.auth_algorithm])
    except ValueError as exc:
        raise _unauthorized("invalid or expired token") from exc
    return Actor(name=subject, is_admin=role == ADMIN_ROLE)


async def require_admin(actor: Actor = Depends(get_actor)) -> Actor:
    if not actor.is_admin:
        raise _unauthorized("administrator token required")
    return actor
