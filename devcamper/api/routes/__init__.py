"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes only orchestrate: parse, list pipeline or fetch → guard → write, envelope

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
