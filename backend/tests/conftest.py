import os
import sys
import uuid
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SECRET_KEY", "fellowship-connect-test-secret-key-0123456789abcdef")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./fellowship-test.db")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from fellowship.main import app
from fellowship.api.dependencies import get_publisher
from fellowship.core.constants import ROLE_MEMBER
from fellowship.core.security import create_session_token, hash_password
from fellowship.database.session import build_engine, get_db, init_db
from fellowship.models.prayer import PrayerEntry
from fellowship.models.user import User

PASSWORD = "secret123"
# hashing once keeps user fixtures fast
PASSWORD_HASH = hash_password(PASSWORD)


class RecordingPublisher:
    """Collects (room, event, payload) instead of pushing to sockets."""

    def __init__(self):
        self.frames = []

    async def publish(self, room, event, payload):
        self.frames.append((room, event, payload))

    def for_room(self, room):
        return [frame for frame in self.frames if frame[0] == room]


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user)}"}


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    await init_db(bind=test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
async def client(session_factory, publisher):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_publisher] = lambda: publisher
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    async def _make_user(name="Member", role=ROLE_MEMBER, email=None, is_active=True, **fields):
        async with session_factory() as session:
            user = User(
                name=name,
                email=email or f"{uuid.uuid4().hex[:10]}@example.com",
                password_hash=PASSWORD_HASH,
                role=role,
                is_active=is_active,
                **fields,
            )
            session.add(user)
            await session.commit()
            return user
    return _make_user


@pytest.fixture
def add_prayer(session_factory):
    async def _add_prayer(user, created_at, duration=10, is_answered=False, type="personal"):
        async with session_factory() as session:
            entry = PrayerEntry(
                user_id=user.id,
                type=type,
                title="Morning prayer",
                description="Quiet time",
                duration=duration,
                is_answered=is_answered,
                tags=[],
                created_at=created_at,
                updated_at=created_at,
            )
            session.add(entry)
            await session.commit()
            return entry
    return _add_prayer
