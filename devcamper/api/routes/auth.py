"""Auth Routes — identity of the current bearer and self-service profile edits.

Invariants:
    - Token issuance is not handled here; only the current actor is exposed
    - updatedetails touches the actor's own row only, and only name and email
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.api.dependencies import get_actor
from devcamper.api.envelopes import single
from devcamper.core.domain_types import Actor
from devcamper.infrastructure.database import get_db
from devcamper.infrastructure.repository import UserRepository
from devcamper.schemas.user import UserDetailsUpdate

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.get("/me")
async def get_me(actor: Actor = Depends(get_actor), db: AsyncSession = Depends(get_db)):
    """Return the authenticated user's record."""
    user = await UserRepository(db).get(actor.id)
    return single(user.to_dict())


@router.put("/updatedetails")
async def update_details(
    body: UserDetailsUpdate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Change the authenticated user's name and/or email."""
    users = UserRepository(db)
    user = await users.get(actor.id)
    user = await users.update(user, body.changes())
    return single(user.to_dict())
