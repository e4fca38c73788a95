"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies)
    - Update schemas forbid unknown keys, so owner/parent references cannot be
      smuggled into a PUT body
    - Field declaration order is the order validation messages are reported in

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class PartialUpdate(BaseModel):
    """Base for PUT bodies: every field optional, but required columns not nullable."""

    model_config = ConfigDict(extra="forbid")

    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.not_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
