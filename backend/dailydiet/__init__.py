"""
Daily Diet Backend: Application Package
=========================================

What: Diet-tracking REST API. Users register to receive a session cookie,
      then record meals and read back aggregate diet metrics.
Who:  Imported by uvicorn (`dailydiet.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes + Dependencies (API)     │  ← HTTP concerns, session guard
    ├─────────────────────────────────────┤
    │         Services (Queries)          │  ← UserService, MealService
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
