"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the UUID of the acting user
    - Actor is immutable once built by the authentication dependency
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles — maps to the users.role column."""
    USER = "user"
    PUBLISHER = "publisher"
    ADMIN = "admin"


class Comparator(str, Enum):
    """Filter comparators accepted as `field[op]=value` in query strings."""
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FieldType(str, Enum):
    """Scalar types a query-string value can be coerced to."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    UUID = "uuid"


# ─── Principals ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Actor:
    """Authenticated principal making the request."""
    id: UserId
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
