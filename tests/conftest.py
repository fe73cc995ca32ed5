# tests/conftest.py
import os
import sys
from typing import AsyncGenerator

# Add project root to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Settings are read at import time, so the test environment goes in first
os.environ.setdefault("PROJECT_NAME", "WodTracker")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000")
os.environ.setdefault("APP_URL", "http://localhost:3000")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-chars")
os.environ.setdefault("LINE_CHANNEL_ID", "1234567890")
os.environ.setdefault("LINE_CHANNEL_SECRET", "line-channel-secret")
os.environ.setdefault("LINE_REDIRECT_URI", "http://localhost:8000/auth/line/callback")
os.environ.setdefault("STATS_TIMEZONE", "UTC")

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from wodtracker.main import app as fastapi_app
from wodtracker.auth.config import auth_settings
from wodtracker.auth.models import User
from wodtracker.auth.service import issue_session_token
from wodtracker.database import Base, get_async_session
from wodtracker.scores import models as score_models  # noqa
from wodtracker.wods import models as wod_models  # noqa
from wodtracker.wods.schemas import WodCreate


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_engine) -> AsyncGenerator[FastAPI, None]:
    """FastAPI app bound to the test database."""

    async def get_test_db() -> AsyncGenerator[AsyncSession, None]:
        session_factory = async_sessionmaker(
            bind=db_engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_async_session] = get_test_db

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def create_user(db_session: AsyncSession):
    """Helper fixture to create test users"""

    async def _create_user(username: str = "athlete", line_user_id: str | None = None,
                           display_name: str = "Test Athlete"):
        user = User(
            line_user_id=line_user_id or f"U{username}",
            username=username,
            display_name=display_name,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def auth_cookies():
    """Session cookie for a user, as set by the LINE callback."""

    def _auth_cookies(user: User) -> dict[str, str]:
        return {auth_settings.SESSION_COOKIE_NAME: issue_session_token(user)}

    return _auth_cookies


@pytest.fixture
def wod_payload():
    def _wod_payload(name: str = "Fran", scoring_type: str = "For Time", **overrides) -> dict:
        payload = {
            "name": name,
            "description": "21-15-9",
            "classification": {
                "scoring_type": scoring_type,
                "equipment": ["barbell", "pull-up bar"],
                "difficulty": 4,
            },
            "structure": {
                "type": "rounds",
                "movements": [
                    {"name": "Thruster", "reps": 21, "weight": {"male": "95 lb", "female": "65 lb"}},
                    {"name": "Pull-up", "reps": 21},
                ],
            },
        }
        payload.update(overrides)
        return payload

    return _wod_payload


@pytest_asyncio.fixture
async def create_wod(db_session: AsyncSession, wod_payload):
    from wodtracker.wods.service import create_wod as create_wod_service

    async def _create_wod(owner: User, name: str = "Fran", scoring_type: str = "For Time",
                          **overrides):
        wod = WodCreate.model_validate(wod_payload(name, scoring_type, **overrides))
        return await create_wod_service(owner.id, wod, db_session)

    return _create_wod
