"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Owned resources (Bootcamp, Review) carry exactly one user_id, set on insert

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from devcamper.models.user import User  # noqa: F401
from devcamper.models.bootcamp import Bootcamp  # noqa: F401
from devcamper.models.review import Review  # noqa: F401
