"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core (errors, access rules, query planning) separated from the
      imperative shell that talks to FastAPI and SQLAlchemy
"""
