"""
NoteKeeper Backend - Application Package Initializer
====================================================

What: Marks the `notekeeper` directory as a Python package.
Who:  Imported by uvicorn (`notekeeper.main:app`), Alembic and pytest.

Architecture Note:
    The backend is layered:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Note lifecycle, word statistics
    ├─────────────────────────────────────┤
    │     Domain & Schemas (Data)         │  ← Pydantic entities + API contracts
    ├─────────────────────────────────────┤
    │   Repositories (Persistence)        │  ← SQLAlchemy or in-memory storage
    └─────────────────────────────────────┘

    Services only talk to the abstract NoteRepository, so the storage
    backend is selected by configuration and can be faked in tests.
"""

__version__ = "1.0.0"
