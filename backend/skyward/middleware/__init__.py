# Middleware package init
"""
Skyward Notes — Middleware Package
===================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    1. Request ID first, so the access log line and error handlers can
       quote it
    2. Logging measures everything below it, including rendering
"""
