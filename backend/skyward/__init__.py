"""
Skyward Notes — Application Package Initializer
================================================

What:  Marks the `skyward` directory as a Python package.
Who:   Imported by uvicorn (`skyward.main:app`), Alembic and pytest.

Architecture Note:
    The notebook follows the same layering on every request:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP adapter)        │  ← form/query parsing, redirects
    ├─────────────────────────────────────┤
    │     NotebookHandler (decisions)     │  ← intent, validation, view-model
    ├─────────────────────────────────────┤
    │   NoteStore (persistence)  │ Render │  ← SQL CRUD  │  Jinja2 page
    ├─────────────────────────────────────┤
    │        Database (sessions)          │  ← async SQLAlchemy
    └─────────────────────────────────────┘

    The handler never touches HTTP objects and the renderer never touches
    the database, so both are testable in isolation.
"""

__version__ = "1.0.0"
