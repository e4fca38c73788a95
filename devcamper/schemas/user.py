"""User Schemas — admin-managed user records.

Invariants:
    - email must look like an address; uniqueness is enforced by the database
    - role defaults to "user"
"""

from typing import ClassVar, Literal

from pydantic import BaseModel, Field

from devcamper.schemas import PartialUpdate

RoleName = Literal["user", "publisher", "admin"]

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=255)
    role: RoleName = "user"


class UserUpdate(PartialUpdate):
    not_nullable: ClassVar[tuple[str, ...]] = ("name", "email", "role")

    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN, max_length=255)
    role: RoleName | None = None


class UserDetailsUpdate(PartialUpdate):
    """Self-service profile edit; role and id are not reachable from here."""
    not_nullable: ClassVar[tuple[str, ...]] = ("name", "email")

    name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN, max_length=255)
