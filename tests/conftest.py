import os
import tempfile
from datetime import date, timedelta

# must be set before studymate.config is imported
_TEST_DIR = tempfile.mkdtemp(prefix="studymate-tests-")
_TEST_DB_PATH = os.path.join(_TEST_DIR, "test.db")
os.environ["ENV"] = "test"
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from typing import AsyncGenerator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from studymate.main import app
from studymate.api.auth import create_access_token
from studymate.models import User

sync_engine = create_engine(f"sqlite:///{_TEST_DB_PATH}")


@pytest.fixture(autouse=True)
def clean_db():
    SQLModel.metadata.drop_all(sync_engine)
    SQLModel.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token() -> str:
    return create_access_token("uid-test", email="test@studymate.local", name="Test User")


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token('uid-other')}"}


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def in_days(today):
    def _in_days(n: int) -> str:
        return (today + timedelta(days=n)).isoformat()
    return _in_days


@pytest.fixture
async def db(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Standalone async session on its own database, for service-level tests."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'service.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def user(db: AsyncSession) -> User:
    u = User(firebase_uid="uid-service", email="service@studymate.local")
    db.add(u)
    await db.commit()
    await db.refresh(u)
    return u
