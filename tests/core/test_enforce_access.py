"""Access Enforcement — tests for the role and ownership predicates.

Tests cover:
    - require_role passes for allowed roles, raises ForbiddenError (403) otherwise
    - require_owner_or_admin passes for the owner and for any admin
    - require_owner_or_admin raises UnauthorizedError (401) for other users
    - Neither check mutates its inputs
"""

from uuid import uuid4

import pytest

from devcamper.core.domain_types import Actor, Role, UserId
from devcamper.core.enforce_access import require_owner_or_admin, require_role
from devcamper.core.errors import ErrorKind, ForbiddenError, UnauthorizedError


def _actor(role: Role = Role.USER) -> Actor:
    return Actor(id=UserId(uuid4()), role=role)


# ─── require_role ────────────────────────────────────────────────

def test_require_role_allows_listed_role():
    assert require_role(_actor(Role.ADMIN), {Role.ADMIN}) is None


def test_require_role_accepts_any_iterable():
    assert require_role(_actor(Role.PUBLISHER), [Role.PUBLISHER, Role.ADMIN]) is None


def test_require_role_rejects_unlisted_role():
    with pytest.raises(ForbiddenError) as exc_info:
        require_role(_actor(Role.USER), {Role.ADMIN})
    assert exc_info.value.http_status == 403
    assert exc_info.value.kind == ErrorKind.FORBIDDEN
    assert "user" in exc_info.value.message


def test_require_role_with_no_allowed_roles_rejects_everyone():
    with pytest.raises(ForbiddenError):
        require_role(_actor(Role.ADMIN), set())


# ─── require_owner_or_admin ──────────────────────────────────────

def test_owner_passes():
    actor = _actor(Role.USER)
    assert require_owner_or_admin(actor, actor.id) is None


def test_admin_passes_regardless_of_owner():
    admin = _actor(Role.ADMIN)
    for _ in range(5):
        assert require_owner_or_admin(admin, uuid4()) is None


def test_non_owner_user_rejected_with_401():
    with pytest.raises(UnauthorizedError) as exc_info:
        require_owner_or_admin(_actor(Role.USER), uuid4(), "delete", "review")
    assert exc_info.value.http_status == 401
    assert exc_info.value.message.endswith("not authorized to delete this review")


def test_non_owner_publisher_rejected():
    with pytest.raises(UnauthorizedError):
        require_owner_or_admin(_actor(Role.PUBLISHER), uuid4(), "update", "bootcamp")


def test_actor_is_immutable():
    actor = _actor()
    with pytest.raises(AttributeError):
        actor.role = Role.ADMIN  # type: ignore[misc]
