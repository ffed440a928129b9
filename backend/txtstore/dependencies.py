"""
TxtStore — FastAPI Dependencies
================================

The Record Store is attached to the application once, in create_app(), and
handed to each handler through this dependency. No handler reaches for a
module-level store or opens its own connection.
"""

from fastapi import Request

from txtstore.services.record_store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Return the store the application was built with."""
    return request.app.state.store
