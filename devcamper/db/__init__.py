"""Database Metadata — SQLAlchemy declarative base shared by models and migrations.

Invariants:
    - Models and alembic both import Base from db/base.py, never redeclare it
"""
