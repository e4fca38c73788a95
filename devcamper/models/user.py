"""User ORM — accounts that own bootcamps and reviews.

Invariants:
    - id is UUID primary key (client-side default)
    - email is unique across all users
    - role is one of Role's values; new accounts default to "user"

Design Decisions:
    - Credentials are not stored here: token issuance lives in a separate service,
      this API only verifies tokens and reads the role
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from devcamper.core.domain_types import Role
from devcamper.db.base import Base


class User(Base):
    """User entity — the principal behind every authenticated request."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.USER.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "created_at": self.created_at.isoformat(),
        }
