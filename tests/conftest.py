"""
Shared fixtures: in-memory SQLite store, test token issuer, HTTP client.
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.dependencies import get_password_hasher, get_token_issuer
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from database.session import get_db_session, init_models
from main import create_app

SHORT_TTL = 3600
EXTENDED_TTL = 30 * 24 * 3600


class FakeClock:
    """Settable stand-in for ``time.time``."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def issuer(clock) -> TokenIssuer:
    return TokenIssuer("test-secret", SHORT_TTL, EXTENDED_TTL, clock=clock)


@pytest.fixture
def hasher() -> PasswordHasher:
    # Lowest bcrypt cost keeps the suite fast.
    return PasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest.fixture
def app(session_factory, issuer, hasher):
    application = create_app(create_tables=False)

    async def _test_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    application.dependency_overrides[get_db_session] = _test_db_session
    application.dependency_overrides[get_token_issuer] = lambda: issuer
    application.dependency_overrides[get_password_hasher] = lambda: hasher
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def signup(client, email="a@x.com", password="pw", full_name="Ada Lovelace", **extra):
    payload = {"fullName": full_name, "email": email, "password": password, **extra}
    return await client.post("/createUser", json=payload)


async def login_token(client, email="a@x.com", password="pw", **extra) -> str:
    resp = await client.post("/login", json={"email": email, "password": password, **extra})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
