from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.sqltypes import DateTime, String, Text


class Base(DeclarativeBase):
    pass


class SpaceName(StrEnum):
    SALAO_DE_FESTAS = "Salão de Festas"
    CHURRASQUEIRA = "Churrasqueira"


class ReservationStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class StoredRecord(Base):
    """One serialized record of the key-value persistence layer."""

    __tablename__ = "stored_records"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
