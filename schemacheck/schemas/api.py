"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class ValidationRequest(BaseModel):
    """A schema document and one value to check against it."""
    json_schema: Any = Field(..., alias="schema")
    instance: Any = Field(...)


class ErrorDetail(BaseModel):
    kind: str
    message: str
    path: str | None = None


class ValidationResponse(BaseModel):
    valid: bool
    draft_version: int | None
    errors: list[str] = []
    details: list[ErrorDetail] = []


# ---------------------------------------------------------------------------
# Batch validation
# ---------------------------------------------------------------------------

class BatchValidationRequest(BaseModel):
    """One schema, many values."""
    json_schema: Any = Field(..., alias="schema")
    instances: list[Any] = Field(..., min_length=1, max_length=1000)


class RecordResult(BaseModel):
    index: int
    valid: bool
    errors: list[str] = []


class BatchValidationResponse(BaseModel):
    draft_version: int | None
    valid_count: int
    invalid_count: int
    results: list[RecordResult]


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    environment: str
    supported_drafts: list[int] = [4, 6, 7]
