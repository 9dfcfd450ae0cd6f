"""
Pydantic Data Transfer Objects (DTOs) for the Results Receiver service.

These models are used for request parsing, response serialization and
internal data transfer between the API and the stores.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class TestRunDTO(BaseModel):
    """
    DTO for an uploaded test run.

    Mirrors TestRunORM. Every field is optional on input so that the ingestion
    rules, rather than the parser, decide what a valid submission is.
    """
    __test__ = False  # not a pytest test class

    id: int = 0
    browser_name: str = ""
    browser_version: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    revision: str = ""
    full_revision_hash: str = ""
    results_url: Optional[str] = None
    raw_results_url: Optional[str] = None
    labels: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    time_start: Optional[datetime] = None
    time_end: Optional[datetime] = None

    model_config = {"from_attributes": True, "extra": "ignore"}

    @field_validator("browser_name", "revision", "full_revision_hash", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """Treat an explicit JSON null the same as a missing string."""
        return "" if v is None else v


class CheckRunCompletion(BaseModel):
    """
    Payload sent to the check-run reporting service when a run is stored.
    """
    full_revision_hash: str = Field(..., description="Full revision the run was executed against.")
    browser_name: str = Field(..., description="Browser the run was executed against.")
