"""
ShopDesk Backend: Application Package Initializer
=================================================

What: Marks the `shopdesk` directory as a Python package.
Who:  Imported by uvicorn (`shopdesk.main:app`), pytest and the `shopdesk` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← one statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← async SQLAlchemy over SQLite
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls, services talk to the store
    through a per-request session, and the store is built once by the
    application factory and injected into every request.
"""

__version__ = "1.0.0"
