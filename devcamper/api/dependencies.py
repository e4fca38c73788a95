"""Request Dependencies — actor resolution and role gates, composed with FastAPI Depends.

Invariants:
    - get_actor rejects missing/invalid credentials with 401 before any guard or
      list pipeline runs
    - The actor's role is read from the users table on every request, so a role
      change takes effect without reissuing tokens
    - require_roles only composes get_actor with the pure require_role check

Design Decisions:
    - Dependencies instead of middleware mutating request.state: handlers receive
      the Actor as an explicit argument
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.config import Settings, get_settings
from devcamper.core.domain_types import Actor, Role, UserId
from devcamper.core.enforce_access import require_role
from devcamper.core.errors import UnauthorizedError
from devcamper.infrastructure.authentication import decode_access_token
from devcamper.infrastructure.database import get_db
from devcamper.models.user import User

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Actor:
    """Resolve the authenticated principal or raise 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    user_id = decode_access_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )
    user = await db.get(User, user_id)
    if user is None:
        logger.info(f"Token subject {user_id} has no user record")
        raise UnauthorizedError()
    logger.debug(
        f"Resolved actor {user.id} ({user.role})", extra={"actor_id": str(user.id)},
    )
    return Actor(id=UserId(user.id), role=Role(user.role))


def require_roles(*roles: Role):
    """Dependency factory: authenticated actor whose role is one of roles."""
    allowed = frozenset(roles)

    async def _actor_with_role(actor: Actor = Depends(get_actor)) -> Actor:
        require_role(actor, allowed)
        return actor

    return _actor_with_role
