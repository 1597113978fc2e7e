# Routes package init
"""
Skyward Notes — Routes Package
===============================

Route Inventory:
    - notebook.py:  GET  /        (note list + form page)
                    POST /        (create, update, delete submissions)
    - health.py:    GET  /health  (service health check)

Routes stay THIN: they read the request, call NotebookHandler, and pick the
response type. Decisions live in skyward.services.request_handler.
"""
