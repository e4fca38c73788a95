"""Bootcamp Schemas — request bodies for creating and updating bootcamps.

Invariants:
    - name: 1-50 chars, stripped; description: 1-500 chars
    - careers limited to the published career tracks
    - user_id and average_rating are never accepted from clients
"""

from typing import ClassVar, Literal

from pydantic import BaseModel, Field, field_validator

from devcamper.schemas import PartialUpdate

Career = Literal[
    "Web Development", "Mobile Development", "UI/UX",
    "Data Science", "Business", "Other",
]

_URL_PATTERN = r"^https?://[^\s/$.?#].[^\s]*$"
_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class BootcampCreate(BaseModel):
    """Bootcamp creation — owner comes from the authenticated actor."""
    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=500)
    website: str | None = Field(None, pattern=_URL_PATTERN)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN)
    address: str | None = Field(None, max_length=255)
    careers: list[Career] = Field(default_factory=list)
    average_cost: int | None = Field(None, ge=0)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please add a name")
        return v


class BootcampUpdate(PartialUpdate):
    """Partial bootcamp update."""
    not_nullable: ClassVar[tuple[str, ...]] = (
        "name", "description", "careers",
        "housing", "job_assistance", "job_guarantee", "accept_gi",
    )

    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, min_length=1, max_length=500)
    website: str | None = Field(None, pattern=_URL_PATTERN)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN)
    address: str | None = Field(None, max_length=255)
    careers: list[Career] | None = None
    average_cost: int | None = Field(None, ge=0)
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None
