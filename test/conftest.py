"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (sqlite database URL, test log dir, in-memory broadcast and lock)
- `database` / `sql_uow_factory`: a fresh aiosqlite database per test for repository tests
- `client`: FastAPI TestClient running the real lifespan against a fresh database
- `fake_redis` / `fake_redis_client`: SET NX PX and EVAL over a dict for the Redis seat lock

Architecture:
- Unit tests (test/**/unit/): in-memory fakes and AsyncMock collaborators only
- Integration tests (test/**/integration/): real SQLAlchemy on aiosqlite, real DI container
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DATABASE_URL'] = (
        f'sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / "seating_engine_test.db"}'
    )
    os.environ['BROADCAST_BACKEND'] = 'memory'
    os.environ['SEAT_LOCK_BACKEND'] = 'memory'
    os.environ.setdefault('BOOKING_LOCK_TIMEOUT_SECONDS', '2')


_early_setup_test_environment()

from collections.abc import AsyncIterator, Callable, Iterator  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import anyio  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.main import app  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.database.db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402


def _sqlite_url(path: Path) -> str:
    return f'sqlite+aiosqlite:///{path}'


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    db = Database(url=_sqlite_url(tmp_path / 'repo.db'))
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def sql_uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(database.session)


@pytest.fixture
def client(tmp_path: Path) -> Iterator[TestClient]:
    container.reset_singletons()
    container.database.override(
        providers.Singleton(Database, url=_sqlite_url(tmp_path / 'api.db'))
    )
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.database.reset_override()
        container.reset_singletons()


def user_headers(user_id: str) -> dict[str, str]:
    return {'X-User-Id': user_id}


@pytest.fixture
def alice() -> dict[str, str]:
    return user_headers('alice')


@pytest.fixture
def bob() -> dict[str, str]:
    return user_headers('bob')


class FakeRedis:
    """
    The slice of redis.asyncio.Redis the seat lock uses

    Every call yields to the event loop so concurrent holders interleave the way they do
    against a real server. Expiry is not simulated; tests rewrite `store` instead.
    """

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.set_calls: list[tuple[str, str, bool, int | None]] = []

    async def set(
        self, name: str, value: str, nx: bool = False, px: int | None = None
    ) -> bool | None:
        await anyio.sleep(0)
        self.set_calls.append((name, value, nx, px))
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    async def eval(self, script: str, numkeys: int, key: str, token: str) -> int:
        await anyio.sleep(0)
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def fake_redis_client(fake_redis: FakeRedis) -> MagicMock:
    redis_client = MagicMock()
    redis_client.get_client.return_value = fake_redis
    return redis_client
