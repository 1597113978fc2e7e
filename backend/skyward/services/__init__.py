# Services package init
"""
Skyward Notes — Services Layer
===============================

Service Inventory:
    - NoteStore:        CRUD primitives over the `notes` table
    - NotebookHandler:  Per-request intent, validation and view-model assembly

NotebookHandler depends on NoteStore only through its five methods, so tests
can run it against an in-memory database or a mock store.
"""
