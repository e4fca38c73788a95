"""Bootcamp Routes — public reads, publisher/admin creation, owner-or-admin mutation.

Invariants:
    - Mutations follow fetch → require_owner_or_admin → write, nothing in between
    - Owner is the creating actor and is never taken from the body
    - Failures are raised; error_handlers renders them

Design Decisions:
    - get_bootcamp_or_404 exported for the nested review routes
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.api.dependencies import get_actor, require_roles
from devcamper.api.envelopes import collection, single
from devcamper.config import Settings, get_settings
from devcamper.core.domain_types import Actor, Role
from devcamper.core.enforce_access import require_owner_or_admin
from devcamper.core.errors import NotFoundError
from devcamper.core.list_query import build_list_query
from devcamper.core.resource_fields import BOOTCAMP_FIELDS
from devcamper.infrastructure.database import get_db
from devcamper.infrastructure.repository import BootcampRepository
from devcamper.models.bootcamp import Bootcamp
from devcamper.schemas.bootcamp import BootcampCreate, BootcampUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/bootcamps", tags=["bootcamps"])


async def get_bootcamp_or_404(bootcamps: BootcampRepository, bootcamp_id: str) -> Bootcamp:
    bootcamp = await bootcamps.get(bootcamp_id)
    if bootcamp is None:
        raise NotFoundError(f"Bootcamp not found with id of {bootcamp_id}")
    return bootcamp


@router.get("")
async def list_bootcamps(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List bootcamps with filtering, sorting, field selection and pagination."""
    query = build_list_query(
        request.query_params,
        BOOTCAMP_FIELDS,
        default_limit=settings.list_default_limit,
        max_limit=settings.list_max_limit,
    )
    return collection(await BootcampRepository(db).list(query))


@router.get("/{bootcamp_id}")
async def get_bootcamp(bootcamp_id: str, db: AsyncSession = Depends(get_db)):
    bootcamp = await get_bootcamp_or_404(BootcampRepository(db), bootcamp_id)
    return single(bootcamp.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bootcamp(
    body: BootcampCreate,
    actor: Actor = Depends(require_roles(Role.PUBLISHER, Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    bootcamp = await BootcampRepository(db).create(
        {**body.model_dump(), "user_id": actor.id},
    )
    return single(bootcamp.to_dict())


@router.put("/{bootcamp_id}")
async def update_bootcamp(
    bootcamp_id: str,
    body: BootcampUpdate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    bootcamps = BootcampRepository(db)
    bootcamp = await get_bootcamp_or_404(bootcamps, bootcamp_id)
    require_owner_or_admin(actor, bootcamp.user_id, "update", "bootcamp")
    bootcamp = await bootcamps.update(bootcamp, body.changes())
    return single(bootcamp.to_dict())


@router.delete("/{bootcamp_id}")
async def delete_bootcamp(
    bootcamp_id: str,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    bootcamps = BootcampRepository(db)
    bootcamp = await get_bootcamp_or_404(bootcamps, bootcamp_id)
    require_owner_or_admin(actor, bootcamp.user_id, "delete", "bootcamp")
    await bootcamps.delete(bootcamp)
    return single({})
