"""
TxtStore — Application Package Initializer
===========================================

What: Marks the `txtstore` directory as a Python package.
Why:  Enables module imports like `from txtstore.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by uvicorn and pytest.

Architecture Note:
    The service is a thin stack over a single table of text records:

    ┌─────────────────────────────────────┐
    │     Routes (Router + Handlers)      │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Record Store, Mapper)   │  ← Statements, error translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy table + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Connection pool)   │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    The engine is built once by the entry point and handed to the Record Store,
    which is in turn handed to the router factory. Nothing is held in module globals.
"""

__version__ = "1.0.0"
