"""
JSON Schema validation service.

Demonstrates:
- Schema-driven data validation on top of the in-house engine
- Collecting all errors rather than failing on the first one
- Batch validation that splits records into valid / invalid
"""

from __future__ import annotations

import logging
from typing import Any

from schemacheck.engine.loader import Loader
from schemacheck.engine.schema import SchemaEngine

logger = logging.getLogger(__name__)


def validate_against_schema(
    data: Any, schema: dict[str, Any] | bool, *, loader: Loader | None = None
) -> list[str]:
    """
    Validate a decoded value against a JSON schema.
    Returns a list of error messages (empty list = valid).
    """
    engine = SchemaEngine(loader=loader).set_schema_document(schema)
    result = engine.validate_value(data)
    return [] if result.valid else result.errors


def validate_batch(
    records: list[Any], schema: dict[str, Any] | bool, *, loader: Loader | None = None
) -> dict[str, Any]:
    """
    Validate every record against one schema.
    Invalid records are collected but do not stop the batch.
    """
    engine = SchemaEngine(loader=loader).set_schema_document(schema)
    valid, invalid, results = [], [], []

    for index, record in enumerate(records):
        result = engine.validate_value(record)
        results.append({"index": index, "valid": result.valid, "errors": result.errors})
        if result.valid:
            valid.append(record)
        else:
            invalid.append({"record": record, "errors": result.errors})

    logger.info("Validation: %d valid, %d invalid", len(valid), len(invalid))
    return {
        "draft_version": engine.get_version(),
        "valid_records": valid,
        "validation_errors": invalid,
        "valid_count": len(valid),
        "invalid_count": len(invalid),
        "results": results,
    }
