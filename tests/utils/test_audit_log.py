import json
from datetime import date
from decimal import Decimal
from typing import Any, List

import pytest
from amenity_reservations.models import ReservationStatus, SpaceName
from amenity_reservations.utils import audit_log
from amenity_reservations.utils.request_id import set_request_id


def test_emit_audit_log_outputs_json(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    set_request_id("req-123")
    audit_log.emit_audit_log(
        action="reservation.created",
        initiator="resident",
        reservation_id="abc",
        space_name=SpaceName.SALAO_DE_FESTAS,
        day=date(2024, 3, 15),
        apartment="101",
        status_to=ReservationStatus.PENDING,
        value=Decimal("227"),
    )
    set_request_id(None)

    assert len(messages) == 1
    payload = json.loads(messages[0])
    assert payload["action"] == "reservation.created"
    assert payload["initiator"] == "resident"
    assert payload["request_id"] == "req-123"
    assert payload["space_name"] == "Salão de Festas"
    assert payload["date"] == "2024-03-15"
    assert payload["status_to"] == "pending"
    assert payload["value"] == "227.00"
    assert "status_from" not in payload
    assert "timestamp" in payload


def test_emit_audit_log_merges_extra(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())
    audit_log.emit_audit_log(
        action="prices.updated",
        initiator="admin",
        extra={"prices_to": {"Churrasqueira": "80.00"}},
    )
    payload = json.loads(messages[0])
    assert payload["prices_to"] == {"Churrasqueira": "80.00"}
    assert "reservation_id" not in payload


def test_emit_audit_log_raises_on_logger_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    class DummyLogger:
        def info(self, _: Any) -> None:
            raise ValueError("fail")

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    with pytest.raises(RuntimeError):
        audit_log.emit_audit_log(
            action="reservation.deleted",
            initiator="admin",
            reservation_id="abc",
            status_from=ReservationStatus.CONFIRMED,
        )
