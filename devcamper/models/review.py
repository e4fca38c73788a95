"""Review ORM — a user's rating of a bootcamp.

Invariants:
    - Always belongs to a Bootcamp (bootcamp_id FK) and a User (user_id FK, owner)
    - One review per (bootcamp_id, user_id)
    - rating is 1..10 (enforced by schema and CHECK constraint)

Design Decisions:
    - bootcamp relationship is lazy="raise": it is only read when the list
      pipeline or the detail route asks for it with selectinload
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, DateTime, ForeignKey, Uuid,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devcamper.db.base import Base


class Review(Base):
    """Review entity — owned by the user who wrote it."""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("bootcamp_id", "user_id", name="uq_reviews_bootcamp_user"),
        CheckConstraint("rating >= 1 AND rating <= 10", name="ck_reviews_rating"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    bootcamp_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("bootcamps.id", ondelete="CASCADE"), nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    bootcamp: Mapped["Bootcamp"] = relationship("Bootcamp", lazy="raise")

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "text": self.text,
            "rating": self.rating,
            "bootcamp_id": str(self.bootcamp_id),
            "user_id": str(self.user_id),
            "created_at": self.created_at.isoformat(),
        }
