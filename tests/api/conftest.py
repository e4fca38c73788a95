"""API test fixtures — async DB, FastAPI test client, seeded users and tokens.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - Seed fixtures write through their own short-lived sessions, so the route's
      session never sees stale identity-map state

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Tokens minted with PyJWT using the configured secret, standing in for the
      external auth service
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from devcamper.config import get_settings
from devcamper.infrastructure.database import get_db
from devcamper.main import app
from devcamper.models.user import User



@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user (claims can be overridden)."""
    settings = get_settings()

    def _headers(user: User, **claims) -> dict:
        payload = {
            "sub": str(user.id),
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            **claims,
        }
        token = jwt.encode(
            payload, settings.jwt_secret, algorithm=settings.jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_user(test_session_factory):
    counter = {"n": 0}

    async def _make(role: str = "user", name: str | None = None) -> User:
        counter["n"] += 1
        async with test_session_factory() as s:
            user = User(
                name=name or f"{role.title()} {counter['n']}",
                email=f"{role}{counter['n']}@example.com",
                role=role,
            )
            s.add(user)
            await s.commit()
            await s.refresh(user)
            return user

    return _make


@pytest.fixture
async def admin(make_user):
    return await make_user("admin")


@pytest.fixture
async def publisher(make_user):
    return await make_user("publisher")


@pytest.fixture
async def user_a(make_user):
    return await make_user("user", name="User A")


@pytest.fixture
async def user_b(make_user):
    return await make_user("user", name="User B")
