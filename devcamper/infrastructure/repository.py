"""SQL Repositories — persistence for bootcamps, reviews and users over AsyncSession.

Invariants:
    - Identifiers are parsed here; a malformed one raises InvalidReferenceError
      before any SQL is sent
    - Owner and parent references are immutable: update() rejects them
    - Every write commits; failures propagate raw to the error normalizer
    - A bootcamp's average_rating equals AVG(rating) of its reviews after every
      review write, updated in the same commit as the review

Design Decisions:
    - One generic SqlRepository plus small subclasses for per-resource rules,
      rather than a repository class per table with duplicated CRUD
    - Bootcamp deletion removes its reviews explicitly: SQLite (tests) does not
      enforce ON DELETE CASCADE unless the FK pragma is on
"""

import logging
from collections.abc import Iterable
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devcamper.core.errors import InvalidReferenceError, ValidationFailedError
from devcamper.core.list_query import ListQuery, ListResult
from devcamper.core.resource_fields import (
    BOOTCAMP_FIELDS, REVIEW_FIELDS, USER_FIELDS, ResourceFields,
)
from devcamper.infrastructure.list_executor import execute_list_query
from devcamper.models.bootcamp import Bootcamp
from devcamper.models.review import Review
from devcamper.models.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def parse_identifier(raw: str | UUID) -> UUID:
    """Parse a path identifier; malformed input is an invalid reference."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        raise InvalidReferenceError()


class SqlRepository(Generic[ModelT]):
    """CRUD + list pipeline for one model."""

    immutable_fields: frozenset[str] = frozenset({"id", "created_at"})

    def __init__(self, db: AsyncSession, model: type[ModelT], fields: ResourceFields):
        self.db = db
        self.model = model
        self.fields = fields

    async def get(
        self, raw_id: str | UUID, *, populate: Iterable[str] = (),
    ) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == parse_identifier(raw_id))
        for name in populate:
            stmt = stmt.options(selectinload(getattr(self.model, name)))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list(self, query: ListQuery) -> ListResult:
        return await execute_list_query(self.db, self.model, self.fields, query)

    async def create(self, values: dict) -> ModelT:
        row = self.model(**values)
        self.db.add(row)
        await self._before_commit(row)
        await self.db.commit()
        await self.db.refresh(row)
        logger.info(
            f"Created {self.fields.resource} {row.id}",
            extra={"resource": self.fields.resource, "resource_id": str(row.id)},
        )
        return row

    async def update(self, row: ModelT, values: dict) -> ModelT:
        locked = sorted(self.immutable_fields.intersection(values))
        if locked:
            raise ValidationFailedError(
                f"Field(s) {', '.join(locked)} cannot be changed",
            )
        for name, value in values.items():
            setattr(row, name, value)
        await self._before_commit(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def delete(self, row: ModelT) -> None:
        row_id = row.id
        await self.db.delete(row)
        await self._before_commit(row)
        await self.db.commit()
        logger.info(
            f"Deleted {self.fields.resource} {row_id}",
            extra={"resource": self.fields.resource, "resource_id": str(row_id)},
        )

    async def _before_commit(self, row: ModelT) -> None:
        """Hook for writes that must land in the same transaction as row."""


class UserRepository(SqlRepository[User]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, User, USER_FIELDS)


class BootcampRepository(SqlRepository[Bootcamp]):
    immutable_fields = frozenset({"id", "created_at", "user_id"})

    def __init__(self, db: AsyncSession):
        super().__init__(db, Bootcamp, BOOTCAMP_FIELDS)

    async def delete(self, row: Bootcamp) -> None:
        await self.db.execute(delete(Review).where(Review.bootcamp_id == row.id))
        await super().delete(row)


class ReviewRepository(SqlRepository[Review]):
    immutable_fields = frozenset({"id", "created_at", "user_id", "bootcamp_id"})

    def __init__(self, db: AsyncSession):
        super().__init__(db, Review, REVIEW_FIELDS)

    async def _before_commit(self, row: Review) -> None:
        await self.db.flush()
        average = await self.db.scalar(
            select(func.avg(Review.rating)).where(Review.bootcamp_id == row.bootcamp_id),
        )
        await self.db.execute(
            update(Bootcamp)
            .where(Bootcamp.id == row.bootcamp_id)
            .values(average_rating=float(average) if average is not None else None),
        )
