"""
Programmers Backend — Application Package Initializer
======================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Pages (Jinja2 + Angular.js SPA)   │  ← index page, partials, static JS
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← /api/programmers resource controller
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, hashing, persistence calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
