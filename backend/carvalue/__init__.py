"""
CarValue Backend — Application Package Initializer
==================================================

What: Marks the `carvalue` directory as a Python package.
Why:  Enables module imports like `from carvalue.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP, session cookie, guards
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← users, auth, reports, estimate
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL directly; services never see HTTP requests.
    Session-cookie transport and password hashing live at the edges
    (carvalue.routes.deps and carvalue.security).
"""

__version__ = "1.0.0"
