"""Review Routes — public reads, user/admin authoring, owner-or-admin mutation.

Invariants:
    - A review is created only under an existing bootcamp (404 otherwise)
    - bootcamp_id and user_id come from the route and the actor, never the body
    - Update/delete: fetch → require_owner_or_admin → write
    - Nested listing reuses the list pipeline with bootcamp_id as a base filter

Design Decisions:
    - Two routers in one module: /reviews and /bootcamps/{id}/reviews share all
      helpers, and splitting them would duplicate the fetch/guard code
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
from devcamper.core.resource_fields import REVIEW_FIELDS
from devcamper.infrastructure.database import get_db
from devcamper.infrastructure.list_executor import serialize_row
from devcamper.infrastructure.repository import (
    BootcampRepository, ReviewRepository, parse_identifier,
)
from devcamper.models.review import Review
from devcamper.schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])
bootcamp_reviews_router = APIRouter(
    prefix="/api/v1/bootcamps/{bootcamp_id}/reviews", tags=["reviews"],
)


async def _get_review_or_404(reviews: ReviewRepository, review_id: str) -> Review:
    review = await reviews.get(review_id)
    if review is None:
        raise NotFoundError(f"No review with the id of {review_id}")
    return review


# ─── /reviews ───────────────────────────────────────────────────

@router.get("")
async def list_reviews(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List all reviews; `populate=bootcamp` embeds the bootcamp name/description."""
    query = build_list_query(
        request.query_params,
        REVIEW_FIELDS,
        default_limit=settings.list_default_limit,
        max_limit=settings.list_max_limit,
    )
    return collection(await ReviewRepository(db).list(query))


@router.get("/{review_id}")
async def get_review(review_id: str, db: AsyncSession = Depends(get_db)):
    review = await ReviewRepository(db).get(review_id, populate=("bootcamp",))
    if review is None:
        raise NotFoundError(f"No review found with the id of {review_id}")
    return single(serialize_row(review, REVIEW_FIELDS, populate=("bootcamp",)))


@router.put("/{review_id}")
async def update_review(
    review_id: str,
    body: ReviewUpdate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    reviews = ReviewRepository(db)
    review = await _get_review_or_404(reviews, review_id)
    require_owner_or_admin(actor, review.user_id, "update", "review")
    review = await reviews.update(review, body.changes())
    return single(review.to_dict())


@router.delete("/{review_id}")
async def delete_review(
    review_id: str,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    reviews = ReviewRepository(db)
    review = await _get_review_or_404(reviews, review_id)
    require_owner_or_admin(actor, review.user_id, "delete", "review")
    await reviews.delete(review)
    return single({})


# ─── /bootcamps/{bootcamp_id}/reviews ───────────────────────────

@bootcamp_reviews_router.get("")
async def list_bootcamp_reviews(
    bootcamp_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List the reviews of one bootcamp."""
    query = build_list_query(
        request.query_params,
        REVIEW_FIELDS,
        base_filter={"bootcamp_id": parse_identifier(bootcamp_id)},
        default_limit=settings.list_default_limit,
        max_limit=settings.list_max_limit,
    )
    return collection(await ReviewRepository(db).list(query))


@bootcamp_reviews_router.post("", status_code=status.HTTP_201_CREATED)
async def add_review(
    bootcamp_id: str,
    body: ReviewCreate,
    actor: Actor = Depends(require_roles(Role.USER, Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    bootcamp = await BootcampRepository(db).get(bootcamp_id)
    if bootcamp is None:
        raise NotFoundError(f"No bootcamp with the id of {bootcamp_id}")
    review = await ReviewRepository(db).create(
        {**body.model_dump(), "bootcamp_id": bootcamp.id, "user_id": actor.id},
    )
    return single(review.to_dict())
