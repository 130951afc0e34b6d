"""
Todos API: Application Package Initializer
===========================================

What: Marks the `todos_api` directory as a Python package.
Who:  Imported by uvicorn (`todos_api.main:app`), the console script and pytest.

Architecture Note:
    The server is a thin layered FastAPI application:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (TodoStore)           │  ← Lookup, mutation, coercion
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Pydantic record + responses
    └─────────────────────────────────────┘

    There is no persistence layer. The store lives in process memory for the
    lifetime of the application and is re-seeded on every start.
"""

__version__ = "1.0.0"
