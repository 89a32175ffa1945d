from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from amenity_reservations.database import create_tables
from amenity_reservations.domain.errors import PersistenceError
from amenity_reservations.infrastructure.repositories import SqlAlchemyKeyValueStore
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    yield engine
    await engine.dispose()


def _kv(engine: AsyncEngine) -> SqlAlchemyKeyValueStore:
    return SqlAlchemyKeyValueStore(async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession))


@pytest.mark.asyncio
async def test_load_missing_key_returns_none(engine: AsyncEngine) -> None:
    await create_tables(engine)
    assert await _kv(engine).load("reservations") is None


@pytest.mark.asyncio
async def test_save_then_load_and_overwrite(engine: AsyncEngine) -> None:
    await create_tables(engine)
    kv = _kv(engine)
    await kv.save("prices", '{"Churrasqueira": "75.00"}')
    assert await kv.load("prices") == '{"Churrasqueira": "75.00"}'

    await kv.save("prices", '{"Churrasqueira": "80.00"}')
    assert await kv.load("prices") == '{"Churrasqueira": "80.00"}'
    assert await kv.load("reservations") is None


@pytest.mark.asyncio
async def test_database_errors_become_persistence_errors(engine: AsyncEngine) -> None:
    kv = _kv(engine)  # tables never created
    with pytest.raises(PersistenceError):
        await kv.save("prices", "{}")
    with pytest.raises(PersistenceError):
        await kv.load("prices")
