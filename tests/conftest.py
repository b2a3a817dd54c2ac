import os

# 설정 로딩 전에 테스트용 환경변수 주입
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from main import app
from core import security
from core.database import Base, get_db
from domains.user.models import User
from domains.group.models import Group  # noqa: F401 (metadata 등록)
from domains.recipe.models import Recipe  # noqa: F401

# 테스트용 DB URL (SQLite In-Memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
PASSWORD = "secret123"


@pytest_asyncio.fixture
async def db_engine():
    # In-Memory SQLite는 연결 공유를 위해 StaticPool 필수
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session):
    # 실제 get_db 대신 테스트용 세션을 주입
    async def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


async def _create_user(session: AsyncSession, username: str, email: str) -> User:
    user = User(username=username, email=email, password=security.hash_password(PASSWORD))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


def make_headers(user: User) -> dict:
    token = security.create_jwt(user_id=user.id, username=user.username, email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(db_session) -> User:
    return await _create_user(db_session, "tester", "tester@example.com")


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    return await _create_user(db_session, "another", "another@example.com")


@pytest.fixture
def auth_headers(test_user) -> dict:
    return make_headers(test_user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return make_headers(other_user)
