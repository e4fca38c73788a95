"""Bootcamp ORM — a coding bootcamp published by a user.

Invariants:
    - name is unique
    - user_id (owner) is set on insert and never updated
    - average_rating is null until the bootcamp has reviews

Design Decisions:
    - JSON column for careers: short list of labels, never queried by element
    - No reviews relationship here: deleting a bootcamp removes its reviews with an
      explicit DELETE in the repository, so nothing is lazily loaded in async code
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, DateTime, JSON, ForeignKey, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from devcamper.db.base import Base


class Bootcamp(Base):
    """Bootcamp entity — owned by the publisher who created it."""
    __tablename__ = "bootcamps"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    careers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    average_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    housing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    job_assistance: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    job_guarantee: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    accept_gi: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
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
            "description": self.description,
            "website": self.website,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "careers": list(self.careers or []),
            "average_rating": self.average_rating,
            "average_cost": self.average_cost,
            "housing": self.housing,
            "job_assistance": self.job_assistance,
            "job_guarantee": self.job_guarantee,
            "accept_gi": self.accept_gi,
            "user_id": str(self.user_id),
            "created_at": self.created_at.isoformat(),
        }
