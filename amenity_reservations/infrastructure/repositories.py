from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..domain.errors import PersistenceError
from ..domain.repositories import KeyValueStore
from ..models import StoredRecord


class SqlAlchemyKeyValueStore(KeyValueStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def load(self, key: str) -> str | None:
        try:
            async with self.session_factory() as session:
                record = await session.scalar(select(StoredRecord).where(StoredRecord.key == key))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to load {key!r}") from exc
        return record.value if isinstance(record, StoredRecord) else None

    async def save(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.get(StoredRecord, key)
                    if record is None:
                        session.add(StoredRecord(key=key, value=value, updated_at=now))
                    else:
                        record.value = value
                        record.updated_at = now
        except SQLAlchemyError as exc:
            raise PersistenceError(f"failed to save {key!r}") from exc


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        self.records: dict[str, str] = {}

    async def load(self, key: str) -> str | None:
        return self.records.get(key)

    async def save(self, key: str, value: str) -> None:
        self.records[key] = value
