"""
TxtStore — Pydantic Response Schemas
=====================================

What:  Pydantic models defining the JSON the API returns.
Why:   Automatic serialization of ORM rows and OpenAPI doc generation.
How:   FastAPI serializes handler return values through `response_model`.

Request bodies need no model: Create takes a bare JSON string, which FastAPI
validates as `str` directly.
"""

from pydantic import BaseModel, Field


class RecordResponse(BaseModel):
    """
    Wire shape of a Record: {"id": <int>, "txt": <string>}.

    Returned by POST /txt (created row), DELETE /txt/{id} (deleted row), and
    as array items by GET /txt.
    """
    id: int = Field(description="Store-generated record identifier")
    txt: str = Field(description="Stored text payload")

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    """
    What:  Readiness response showing service and database status.
    Who:   Returned by GET /health for orchestrator readiness probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since the router was built")
