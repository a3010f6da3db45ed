"""Shared test fixtures for the flyak API."""

import os

from tests.helpers.token_factory import TEST_SECRET

# Set the test JWT secret before any app imports trigger Settings() validation.
os.environ.setdefault("JWT_SECRET", TEST_SECRET)

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from flyak.auth.security import TokenService  # noqa: E402
from flyak.main import app  # noqa: E402
from flyak.providers import get_role_repository  # noqa: E402

TEST_LIFETIME_MINUTES = 15

# ---------------------------------------------------------------------------
# Mock DB session
# ---------------------------------------------------------------------------


def _make_mock_session():
    """Create a mock async DB session.

    ``add``/``add_all`` are synchronous on a real ``AsyncSession`` so they
    are plain mocks here. ``execute`` returns a result whose ``.scalar()``
    works for the readiness probe (``SELECT 1``).
    """
    session = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    result_mock = MagicMock()
    result_mock.scalar.return_value = 1
    session.execute.return_value = result_mock
    session.close = AsyncMock()
    return session


def _make_mock_session_factory():
    """Return a callable that mimics ``async_sessionmaker().__call__()``."""
    mock_session = _make_mock_session()
    factory = MagicMock()
    ctx = AsyncMock()
    ctx.__aenter__.return_value = mock_session
    factory.return_value = ctx
    return factory, mock_session


# ---------------------------------------------------------------------------
# Token service
# ---------------------------------------------------------------------------


@pytest.fixture()
def token_service() -> TokenService:
    """A fresh service per test so key caching starts from scratch."""
    return TokenService(TEST_SECRET, TEST_LIFETIME_MINUTES)


@pytest.fixture()
def mock_session():
    return _make_mock_session()


# ---------------------------------------------------------------------------
# Mock ORM model factories
# ---------------------------------------------------------------------------

_NOW = datetime.now(UTC)


def _make_user_model(**overrides):
    """Return a SimpleNamespace that looks like a User ORM instance."""
    data = {
        "id": 42,
        "name": "Test Pilot",
        "email": "pilot@flyak.org",
        "roles": ["pilot", "dispatcher"],
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


# ---------------------------------------------------------------------------
# HTTP client fixture (FastAPI app with mocked infra)
# ---------------------------------------------------------------------------


@pytest.fixture()
def user_repo():
    """Mock RoleRepository injected in place of the real one."""
    repo = AsyncMock()
    repo.get_by_id.return_value = _make_user_model()
    return repo


@pytest_asyncio.fixture()
async def client(token_service, user_repo) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app.

    The database is mocked and the lifespan is not run, so tests need no
    running Postgres.
    """
    session_factory, _ = _make_mock_session_factory()

    app.state.engine = MagicMock()
    app.state.session_factory = session_factory
    app.state.token_service = token_service
    app.dependency_overrides[get_role_repository] = lambda: user_repo

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
