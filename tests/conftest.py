"""Root conftest — environment and database fixtures shared by every test package.

Invariants:
    - Environment is set before any devcamper module reads Settings
    - Every test gets a fresh in-memory SQLite database

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient here
      (PostgreSQL-specific behavior is covered by normalizer unit tests)
"""

import os

# Ensure tests never reach a real database or share a real signing key
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from devcamper.db.base import Base
import devcamper.models  # noqa: F401
from devcamper.models.bootcamp import Bootcamp
from devcamper.models.review import Review

_EPOCH = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def make_bootcamp(test_session_factory):
    """Insert a bootcamp; created_at spaced by `minute` for deterministic order."""
    async def _make(owner, name: str, minute: int = 0, **fields) -> Bootcamp:
        async with test_session_factory() as s:
            bootcamp = Bootcamp(
                name=name,
                description=fields.pop("description", f"About {name}"),
                user_id=owner.id,
                created_at=_EPOCH + timedelta(minutes=minute),
                **fields,
            )
            s.add(bootcamp)
            await s.commit()
            await s.refresh(bootcamp)
            return bootcamp

    return _make


@pytest.fixture
def make_review(test_session_factory):
    async def _make(bootcamp, author, rating: int = 8, title: str = "Great") -> Review:
        async with test_session_factory() as s:
            review = Review(
                title=title,
                text="Learned a lot",
                rating=rating,
                bootcamp_id=bootcamp.id,
                user_id=author.id,
            )
            s.add(review)
            await s.commit()
            await s.refresh(review)
            return review

    return _make
