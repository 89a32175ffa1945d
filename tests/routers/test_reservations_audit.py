from datetime import date
from typing import Any

import pytest
from amenity_reservations.domain.entities import ADMIN, RESIDENT
from amenity_reservations.domain.pricing import PriceCatalog
from amenity_reservations.domain.store import ReservationStore
from amenity_reservations.infrastructure.repositories import InMemoryKeyValueStore
from amenity_reservations.models import ReservationStatus, SpaceName
from amenity_reservations.routers import reservations as router
from amenity_reservations.schemas import ReservationCreate, ReservationRead
from amenity_reservations.usecases.state import AppState
from fastapi import HTTPException

TODAY = date(2024, 3, 10)


def _state() -> AppState:
    return AppState(store=ReservationStore(PriceCatalog(), clock=lambda: TODAY), kv=InMemoryKeyValueStore())


def _capture(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    def fake_emit(**kwargs: Any) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(router, "emit_audit_log", fake_emit)
    return calls


@pytest.mark.asyncio
async def test_create_reservation_emits_audit(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture(monkeypatch)
    state = _state()

    payload = ReservationCreate(space_name=SpaceName.CHURRASQUEIRA, date=date(2024, 3, 20), apartment="101")
    result: ReservationRead = await router.create_reservation(payload=payload, state=state)

    assert result.status == ReservationStatus.PENDING
    assert len(calls) == 1
    assert calls[0]["action"] == "reservation.created"
    assert calls[0]["reservation_id"] == result.reservation_id
    assert calls[0]["initiator"] == "resident"


@pytest.mark.asyncio
async def test_create_reservation_conflict_maps_to_409(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture(monkeypatch)
    state = _state()
    payload = ReservationCreate(space_name=SpaceName.CHURRASQUEIRA, date=date(2024, 3, 20), apartment="101")
    await router.create_reservation(payload=payload, state=state)

    with pytest.raises(HTTPException) as excinfo:
        await router.create_reservation(payload=payload, state=state)
    assert excinfo.value.status_code == 409
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_blank_apartment_maps_to_422(monkeypatch: pytest.MonkeyPatch) -> None:
    _capture(monkeypatch)
    payload = ReservationCreate(space_name=SpaceName.CHURRASQUEIRA, date=date(2024, 3, 20), apartment="   ")
    with pytest.raises(HTTPException) as excinfo:
        await router.create_reservation(payload=payload, state=_state())
    assert excinfo.value.status_code == 422


@pytest.mark.asyncio
async def test_confirm_emits_once_and_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture(monkeypatch)
    state = _state()
    reservation = state.store.create("Churrasqueira", "2024-03-20", "101")

    first = await router.confirm_reservation(reservation_id=reservation.id, state=state, actor=ADMIN)
    second = await router.confirm_reservation(reservation_id=reservation.id, state=state, actor=ADMIN)

    assert first.status == second.status == ReservationStatus.CONFIRMED
    assert [c["action"] for c in calls] == ["reservation.confirmed"]
    assert calls[0]["status_from"] == ReservationStatus.PENDING


@pytest.mark.asyncio
async def test_confirm_by_resident_maps_to_403(monkeypatch: pytest.MonkeyPatch) -> None:
    _capture(monkeypatch)
    state = _state()
    reservation = state.store.create("Churrasqueira", "2024-03-20", "101")
    with pytest.raises(HTTPException) as excinfo:
        await router.confirm_reservation(reservation_id=reservation.id, state=state, actor=RESIDENT)
    assert excinfo.value.status_code == 403


@pytest.mark.asyncio
async def test_delete_unknown_maps_to_404(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture(monkeypatch)
    with pytest.raises(HTTPException) as excinfo:
        await router.delete_reservation(reservation_id="missing", state=_state(), actor=ADMIN)
    assert excinfo.value.status_code == 404
    assert calls == []


@pytest.mark.asyncio
async def test_delete_log_failure_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_emit(**kwargs: Any) -> None:
        raise RuntimeError("fail log")

    monkeypatch.setattr(router, "emit_audit_log", fake_emit)
    state = _state()
    reservation = state.store.create("Churrasqueira", "2024-03-20", "101")

    with pytest.raises(HTTPException) as excinfo:
        await router.delete_reservation(reservation_id=reservation.id, state=state, actor=ADMIN)
    assert excinfo.value.status_code == 500
    # the deletion itself already happened
    assert len(state.store) == 0
