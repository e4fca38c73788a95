"""Access Enforcement — the two authorization predicates shared by every handler.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no mutation of their inputs
    - Return None on success, raise an ApiError subclass on violation
    - require_owner_or_admin runs after the fetch and before any write

Design Decisions:
    - Exceptions (not error dicts): the global handler turns them into the
      error envelope, so handlers never build error JSON themselves
    - Owner passed as an id, not the ORM object: the guard cannot touch the row
"""

from collections.abc import Iterable
from uuid import UUID

from devcamper.core.domain_types import Actor, Role
from devcamper.core.errors import ForbiddenError, UnauthorizedError


def require_role(actor: Actor, allowed_roles: Iterable[Role]) -> None:
    """Rule 1: actor's role must be one of allowed_roles."""
    if actor.role not in set(allowed_roles):
        raise ForbiddenError(
            f"User role {actor.role.value} is not authorized to access this route",
        )


def require_owner_or_admin(
    actor: Actor, owner_id: UUID, action: str = "update", resource: str = "resource",
) -> None:
    """Rule 2: only the owner or an admin may mutate an owned resource."""
    if actor.is_admin or actor.id == owner_id:
        return
    raise UnauthorizedError(
        f"User {actor.id} is not authorized to {action} this {resource}",
    )
