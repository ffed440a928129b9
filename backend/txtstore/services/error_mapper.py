"""
TxtStore — Error Mapper
========================

What:  Translates a StoreError into a (status code, message) pair.
Why:   Decouples transport-facing error semantics from storage failure causes.
Who:   Called by the StoreError exception handler registered in main.py.

Policy:
    Every StoreError maps to 500 with the error's text as the body, whether
    the cause was a missing row, a constraint violation, or a lost connection.
"""

from typing import Tuple

from txtstore.exceptions import StoreError

INTERNAL_SERVER_ERROR = 500


def map_store_error(error: StoreError) -> Tuple[int, str]:
    """Pure mapping: same error in, same (status, message) out."""
    return INTERNAL_SERVER_ERROR, str(error)
