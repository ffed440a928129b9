# Middleware package init
"""
TxtStore — Middleware Package
==============================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the access log line carries the ID.
"""
