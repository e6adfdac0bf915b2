# tests/conftest.py
import os

from dotenv import load_dotenv

# Load .env.test if available, then point the app at the test database
load_dotenv(".env.test", override=False)
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL or "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from pm_reports.api.deps import get_private_message_report_service  # noqa: E402
from pm_reports.db import _apply_asyncpg_scheme  # noqa: E402
from pm_reports.infra.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from pm_reports.main import create_app  # noqa: E402
from pm_reports.models import Base  # noqa: E402
from pm_reports.services.private_message_reports import PrivateMessageReportService  # noqa: E402


def _engine_kwargs(url: str):
    if url.startswith("sqlite"):
        # One file per test; each session gets its own connection
        return dict(future=True, echo=False, poolclass=NullPool)
    # NullPool avoids sharing connections across event loops
    return dict(future=True, echo=False, poolclass=NullPool, pool_pre_ping=True)


def _test_database_url(tmp_path) -> str:
    if TEST_DATABASE_URL:
        return _apply_asyncpg_scheme(TEST_DATABASE_URL)
    return f"sqlite+aiosqlite:///{tmp_path / 'pm_reports_test.db'}"


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    url = _test_database_url(tmp_path)
    eng = create_async_engine(url, **_engine_kwargs(url))
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture(scope="function", name="session")
async def _session(session_factory):
    async with session_factory() as s:
        yield s
        if s.in_transaction():
            await s.rollback()


@pytest.fixture
def service(session_factory) -> PrivateMessageReportService:
    return PrivateMessageReportService(lambda: SqlAlchemyUnitOfWork(session_factory))


@pytest_asyncio.fixture
async def app_client(service):
    app = create_app()
    app.dependency_overrides[get_private_message_report_service] = lambda: service
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
