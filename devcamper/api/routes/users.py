"""User Routes — admin-only user management.

Invariants:
    - Every route requires an authenticated admin (router-level dependency)
    - Listing goes through the shared list pipeline
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.api.dependencies import require_roles
from devcamper.api.envelopes import collection, single
from devcamper.config import Settings, get_settings
from devcamper.core.domain_types import Role
from devcamper.core.errors import NotFoundError
from devcamper.core.list_query import build_list_query
from devcamper.core.resource_fields import USER_FIELDS
from devcamper.infrastructure.database import get_db
from devcamper.infrastructure.repository import UserRepository
from devcamper.models.user import User
from devcamper.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/users",
    tags=["users"],
    dependencies=[Depends(require_roles(Role.ADMIN))],
)


async def _get_user_or_404(users: UserRepository, user_id: str) -> User:
    user = await users.get(user_id)
    if user is None:
        raise NotFoundError(f"No user with the id of {user_id}")
    return user


@router.get("")
async def list_users(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    query = build_list_query(
        request.query_params,
        USER_FIELDS,
        default_limit=settings.list_default_limit,
        max_limit=settings.list_max_limit,
    )
    return collection(await UserRepository(db).list(query))


@router.get("/{user_id}")
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    user = await _get_user_or_404(UserRepository(db), user_id)
    return single(user.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await UserRepository(db).create(body.model_dump())
    return single(user.to_dict())


@router.put("/{user_id}")
async def update_user(
    user_id: str, body: UserUpdate, db: AsyncSession = Depends(get_db),
):
    users = UserRepository(db)
    user = await _get_user_or_404(users, user_id)
    user = await users.update(user, body.changes())
    return single(user.to_dict())


@router.delete("/{user_id}")
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db)):
    users = UserRepository(db)
    user = await _get_user_or_404(users, user_id)
    await users.delete(user)
    return single({})
