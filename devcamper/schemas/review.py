"""Review Schemas — request bodies for adding and editing reviews.

Invariants:
    - title: 1-100 chars; text non-empty; rating integer 1-10
    - bootcamp and author are taken from the route and the actor, never the body
"""

from typing import ClassVar

from pydantic import BaseModel, Field

from devcamper.schemas import PartialUpdate


class ReviewCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1)
    rating: int = Field(ge=1, le=10)


class ReviewUpdate(PartialUpdate):
    not_nullable: ClassVar[tuple[str, ...]] = ("title", "text", "rating")

    title: str | None = Field(None, min_length=1, max_length=100)
    text: str | None = Field(None, min_length=1)
    rating: int | None = Field(None, ge=1, le=10)
