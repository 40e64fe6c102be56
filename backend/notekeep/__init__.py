"""
NoteKeep Backend — Application Package Initializer
==================================================

What: Marks the `notekeep` directory as a Python package.
Who:  Imported by uvicorn (`notekeep.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is split into the same layers on every resource:

    ┌─────────────────────────────────────┐
    │     Routes + Dependencies (HTTP)    │  ← session principal, ownership checks
    ├─────────────────────────────────────┤
    │         Services (Persistence)      │  ← UserService, NoteService
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Sessions)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes decide who may touch a row; services assume the caller already did.
"""

__version__ = "1.0.0"
