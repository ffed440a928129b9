"""
TxtStore — Record Handlers
===========================

What:  Handles POST /txt (create), GET /txt (list), DELETE /txt/{id} (delete).
Why:   The only resource the service exposes.
How:   Each handler makes exactly one Record Store call and serializes the
       result. Store failures are not caught here: StoreError propagates to
       the global handler, which applies the Error Mapper (500, text/plain).

Input shape:
    - POST body must be a JSON string ("hello"); anything else is a 422.
    - {id} must parse as an integer within the id column's 32-bit range;
      anything else is a 422 before the handler runs.
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Path

from txtstore.dependencies import get_store
from txtstore.models.record import MAX_RECORD_ID, MIN_RECORD_ID
from txtstore.schemas.record import RecordResponse
from txtstore.services.record_store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Records"])

# Documented failure shape shared by every handler
STORE_FAILURE = {
    500: {
        "description": "Store failure; body is the error description",
        "content": {"text/plain": {"schema": {"type": "string"}}},
    },
}


@router.get(
    "/txt",
    response_model=List[RecordResponse],
    responses=STORE_FAILURE,
    summary="List all records",
)
async def list_records(
    store: RecordStore = Depends(get_store),
) -> List[RecordResponse]:
    """Return every stored record. Order is whatever the database yields."""
    records = await store.list()
    return [RecordResponse.model_validate(record) for record in records]


@router.post(
    "/txt",
    response_model=RecordResponse,
    responses=STORE_FAILURE,
    summary="Create a record",
    description="Body is a bare JSON string, e.g. \"hello\". Returns the stored row.",
)
async def create_record(
    txt: str = Body(..., description="Text to store", examples=["hello"]),
    store: RecordStore = Depends(get_store),
) -> RecordResponse:
    """
    Store a new record.

    Responds 200 (not 201) with the created row, including its generated id.
    """
    record = await store.create(txt)
    logger.info("Created record %d (%d chars)", record.id, len(record.txt))
    return RecordResponse.model_validate(record)


@router.delete(
    "/txt/{record_id}",
    response_model=RecordResponse,
    responses=STORE_FAILURE,
    summary="Delete a record",
    description=(
        "Deletes the record and returns its prior contents. Deleting an id that "
        "does not exist is a store failure (500)."
    ),
)
async def delete_record(
    record_id: int = Path(
        ...,
        ge=MIN_RECORD_ID,
        le=MAX_RECORD_ID,
        description="Id of the record to delete",
    ),
    store: RecordStore = Depends(get_store),
) -> RecordResponse:
    record = await store.delete(record_id)
    logger.info("Deleted record %d", record.id)
    return RecordResponse.model_validate(record)
