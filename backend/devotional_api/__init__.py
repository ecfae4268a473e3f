"""
Devotionals API - Application Package Initializer
=================================================

What: Marks the `devotional_api` directory as a Python package.
Who:  Used by uvicorn, Alembic and pytest (`from devotional_api.config import settings`).

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, lifecycle rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls; services own the devotional
    lifecycle (create → update → soft delete) and can be tested without HTTP.
"""

__version__ = "1.0.0"
