"""
FastAPI routes – the main API surface.

Demonstrates:
- RESTful endpoint design
- Running the schema engine via an HTTP trigger
- Returning structured responses with Pydantic models
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from schemacheck.config import settings
from schemacheck.engine.loader import load_remote_only
from schemacheck.engine.schema import SchemaEngine
from schemacheck.schemas.api import (
    BatchValidationRequest,
    BatchValidationResponse,
    ErrorDetail,
    HealthResponse,
    RecordResult,
    ValidationRequest,
    ValidationResponse,
)
from schemacheck.services.validation import validate_batch

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
def health_check():
    """Basic health endpoint."""
    return HealthResponse(status="healthy", environment=settings.ENVIRONMENT)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@router.post("/validate", response_model=ValidationResponse)
def validate_instance(request: ValidationRequest):
    """
    Validate one value against a schema document.
    Invalid data is a normal outcome: the response is 200 with valid=false.
    """
    engine = SchemaEngine(loader=load_remote_only).set_schema_document(request.json_schema)
    result = engine.validate_value(request.instance)
    logger.info("Validated instance against draft-%s schema: %s", engine.get_version(), result.valid)

    return ValidationResponse(
        valid=result.valid,
        draft_version=engine.get_version(),
        errors=result.errors,
        details=[
            ErrorDetail(kind=message.kind.value, message=message.problem, path=message.path)
            for message in result.messages
        ],
    )


@router.post("/validate/batch", response_model=BatchValidationResponse)
def validate_instances(request: BatchValidationRequest):
    """Validate a batch of values against one schema document."""
    summary = validate_batch(request.instances, request.json_schema, loader=load_remote_only)

    return BatchValidationResponse(
        draft_version=summary["draft_version"],
        valid_count=summary["valid_count"],
        invalid_count=summary["invalid_count"],
        results=[RecordResult(**entry) for entry in summary["results"]],
    )
