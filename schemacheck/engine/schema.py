"""
Schema engine: owns one schema document and validates values against it.

Demonstrates:
- Draft detection from ``$schema`` (draft-04, draft-06, draft-07)
- A recursive dispatcher shared by every type validator (ValidationSession)
- ``$ref`` delegation through a cached resolver, with a cycle guard
- Error collection instead of exceptions: a call always ends with a
  boolean plus the ordered list of messages

Usage:
    engine = SchemaEngine('{"type": "integer", "minimum": 0}')
    result = engine.validate("-1")
    result.valid   -> False
    result.errors  -> ["value -1 is less than minimum of 0 at context path: #/"]
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator
from urllib.parse import urldefrag

from schemacheck.config import settings
from schemacheck.engine.arrays import ArrayValidator
from schemacheck.engine.base import BaseValidator
from schemacheck.engine.codec import compact_preview, parse
from schemacheck.engine.errors import (
    ErrorAccumulator,
    ErrorKind,
    RefResolutionError,
    ValidationMessage,
)
from schemacheck.engine.loader import Loader
from schemacheck.engine.objects import ObjectValidator
from schemacheck.engine.resolver import RefResolver
from schemacheck.engine.scalars import (
    BooleanValidator,
    IntegerValidator,
    NullValidator,
    NumberValidator,
)
from schemacheck.engine.strings import StringValidator

logger = logging.getLogger(__name__)

DRAFT_LATEST = "http://json-schema.org/draft/2019-09/schema#"
LATEST_VERSION = 7

DRAFT_VERSIONS: dict[str, int] = {
    DRAFT_LATEST: 7,
    "http://json-schema.org/draft-07/schema#": 7,
    "http://json-schema.org/draft-06/schema#": 6,
    "http://json-schema.org/draft-04/schema#": 4,
    "http://json-schema.org/schema#": 7,
}

# first keyword found, in this order, decides the type of an untyped node
KEYWORDS_TO_TYPES: tuple[tuple[str, str], ...] = (
    ("minLength", "string"),
    ("maxLength", "string"),
    ("pattern", "string"),
    ("format", "string"),
    ("multipleOf", "number"),
    ("minimum", "number"),
    ("exclusiveMinimum", "number"),
    ("maximum", "number"),
    ("exclusiveMaximum", "number"),
    ("properties", "object"),
    ("additionalProperties", "object"),
    ("required", "object"),
    ("propertyNames", "object"),
    ("minProperties", "object"),
    ("maxProperties", "object"),
    ("dependencies", "object"),
    ("patternProperties", "object"),
    ("items", "array"),
    ("additionalItems", "array"),
    ("contains", "array"),
    ("minItems", "array"),
    ("maxItems", "array"),
    ("uniqueItems", "array"),
)

VALIDATORS: dict[str, type[BaseValidator]] = {
    "integer": IntegerValidator,
    "number": NumberValidator,
    "boolean": BooleanValidator,
    "null": NullValidator,
    "string": StringValidator,
    "object": ObjectValidator,
    "array": ArrayValidator,
}


def infer_type(schema: dict[str, Any]) -> str | None:
    for keyword, type_name in KEYWORDS_TO_TYPES:
        if keyword in schema:
            return type_name
    return None


@dataclass
class ValidationResult:
    valid: bool
    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [str(message) for message in self.messages]


class ValidationSession:
    """
    State for one validation call: draft version, resolver, messages.

    Type validators call back into ``validate_subschema`` for every nested
    schema they meet, so the session is the single recursion point.
    """

    def __init__(
        self,
        version: int,
        resolver: RefResolver,
        *,
        max_ref_depth: int,
        errors: ErrorAccumulator | None = None,
    ):
        self.version = version
        self.resolver = resolver
        self.max_ref_depth = max_ref_depth
        self.errors = errors if errors is not None else ErrorAccumulator()
        self._active_refs: set[tuple[str, int]] = set()
        # $ref hops currently open on each value, keyed by id(value)
        self._hops: dict[int, int] = {}

    def validate_subschema(self, schema: Any, value: Any, label: str | None) -> bool:
        if isinstance(schema, bool) and self.version >= 6:
            return schema

        if not isinstance(schema, dict):
            self.errors.add(ErrorKind.SCHEMA_ERROR, "schema is not an object", label)
            return False

        ref = schema.get("$ref")
        if isinstance(ref, str):
            return self._validate_ref(ref, value, label)

        schema_type = schema.get("type") or infer_type(schema)

        if schema_type is None:
            return self._run(BaseValidator(schema, label, self), value)
        if isinstance(schema_type, str):
            validator_class = VALIDATORS.get(schema_type, BaseValidator)
            return self._run(validator_class(schema, label, self), value)
        if isinstance(schema_type, list):
            return self._validate_type_list(schema, schema_type, value, label)

        self.errors.add(
            ErrorKind.SCHEMA_ERROR,
            f"type must be a string or an array of strings, given: {compact_preview(schema_type, 20)}",
            label,
        )
        return False

    def _run(self, validator: BaseValidator, value: Any) -> bool:
        valid = validator.is_valid(value)
        if validator.errors:
            self.errors.extend(validator.errors)
        return valid

    @contextmanager
    def _capture(self) -> Iterator[ErrorAccumulator]:
        """Collect messages of nested validations aside instead of into the session."""
        saved = self.errors
        self.errors = ErrorAccumulator()
        try:
            yield self.errors
        finally:
            self.errors = saved

    def _validate_type_list(self, schema: dict, types: list, value: Any, label: str | None) -> bool:
        attempts = ErrorAccumulator()

        for candidate in types:
            if not isinstance(candidate, str):
                attempts.add(
                    ErrorKind.SCHEMA_ERROR,
                    "if type is array, all elements must be strings",
                    label,
                )
                continue

            validator_class = VALIDATORS.get(candidate, BaseValidator)
            with self._capture() as captured:
                valid = self._run(validator_class(schema, label, self), value)
            if valid:
                return True
            attempts.extend(captured)

        # no candidate matched: surface what each attempt reported
        self.errors.extend(attempts)
        return False

    def _validate_ref(self, ref: str, value: Any, label: str | None) -> bool:
        key = (self.resolver.canonical(ref), id(value))
        if key in self._active_refs:
            logger.warning("Reference cycle on $ref %s", ref)
            self.errors.add(
                ErrorKind.REFERENCE_CYCLE,
                f"reference cycle detected at $ref {compact_preview(ref, 64)}",
                label,
            )
            return False

        # only hops that stay on the same value count: descending into data resets the chain
        hops = self._hops.get(id(value), 0)
        if hops >= self.max_ref_depth:
            logger.warning("$ref chain longer than %d hops at %s", self.max_ref_depth, ref)
            self.errors.add(
                ErrorKind.REFERENCE_ERROR,
                f"$ref chain exceeds {self.max_ref_depth} hops at $ref {compact_preview(ref, 64)}",
                label,
            )
            return False

        try:
            target = self.resolver.resolve(ref)
        except RefResolutionError as exc:
            self.errors.add(
                ErrorKind.REFERENCE_ERROR,
                f"unresolvable $ref {compact_preview(ref, 64)}: {exc.reason}",
                label,
            )
            return False

        self._active_refs.add(key)
        self._hops[id(value)] = hops + 1
        try:
            return self.validate_subschema(target, value, label)
        finally:
            self._active_refs.discard(key)
            if hops:
                self._hops[id(value)] = hops
            else:
                del self._hops[id(value)]


class SchemaEngine:
    """One decoded schema document, its draft version and its ``$ref`` caches."""

    def __init__(
        self,
        json_schema: str | None = None,
        *,
        loader: Loader | None = None,
        max_ref_depth: int | None = None,
    ):
        self._loader = loader
        self._max_ref_depth = max_ref_depth if max_ref_depth is not None else settings.MAX_REF_DEPTH
        self._schema: Any = None
        self._has_schema = False
        self._version: int | None = None
        self._resolver: RefResolver | None = None
        self._setup_errors = ErrorAccumulator()
        self._last_result: ValidationResult | None = None
        if json_schema is not None:
            self.set_schema(json_schema)

    def set_schema(self, json_schema: str) -> SchemaEngine:
        try:
            document = parse(json_schema)
        except ValueError as exc:
            logger.warning("Schema document is not valid JSON: %s", exc)
            self._reset()
            self._setup_errors.add_unlabeled(ErrorKind.DECODE_ERROR, f"schema is not valid JSON: {exc}")
            return self
        return self.set_schema_document(document)

    def set_schema_document(self, document: Any) -> SchemaEngine:
        self._reset()
        self._schema = document
        self._has_schema = True

        declared = document.get("$schema") if isinstance(document, dict) else None
        if isinstance(declared, str):
            version = DRAFT_VERSIONS.get(declared)
            if version is None:
                logger.warning("Unknown $schema %s, using draft-%02d rules", declared, LATEST_VERSION)
                self._setup_errors.add_unlabeled(
                    ErrorKind.SCHEMA_ERROR,
                    f"$schema is unknown: {compact_preview(declared, 64)}",
                )
                version = LATEST_VERSION
        else:
            version = LATEST_VERSION
        self._version = version
        logger.debug("Schema document uses draft-%02d", version)

        base_uri = None
        if isinstance(document, dict):
            declared_id = document.get("id" if version <= 4 else "$id")
            if isinstance(declared_id, str) and declared_id:
                base_uri = urldefrag(declared_id).url or None

        self._resolver = RefResolver(document, base_uri=base_uri, loader=self._loader)
        return self

    def _reset(self) -> None:
        self._schema = None
        self._has_schema = False
        self._version = None
        self._resolver = None
        self._setup_errors = ErrorAccumulator()

    def get_version(self) -> int | None:
        return self._version

    def get_errors(self) -> list[str]:
        """Messages of the last validation, or the setup messages before any."""
        if self._last_result is None:
            return self._setup_errors.as_strings()
        return self._last_result.errors

    def is_valid(self, json_value: str) -> bool:
        return self.validate(json_value).valid

    def validate(self, json_value: str) -> ValidationResult:
        """Validate JSON text against the schema document."""
        try:
            value = parse(json_value)
        except ValueError as exc:
            errors = self._new_accumulator()
            errors.add_unlabeled(ErrorKind.DECODE_ERROR, f"value is not valid JSON: {exc}")
            return self._finish(False, errors)
        return self.validate_value(value)

    def validate_value(self, value: Any) -> ValidationResult:
        """Validate an already decoded value against the schema document."""
        errors = self._new_accumulator()
        if not self._has_schema:
            if not errors:
                errors.add_unlabeled(ErrorKind.SCHEMA_ERROR, "no schema document is set")
            return self._finish(False, errors)

        session = ValidationSession(
            self._version,
            self._resolver,
            max_ref_depth=self._max_ref_depth,
            errors=errors,
        )
        valid = session.validate_subschema(self._schema, value, "#/")
        return self._finish(valid, session.errors)

    def _new_accumulator(self) -> ErrorAccumulator:
        errors = ErrorAccumulator()
        errors.extend(self._setup_errors)
        return errors

    def _finish(self, valid: bool, errors: ErrorAccumulator) -> ValidationResult:
        result = ValidationResult(valid=valid, messages=list(errors.messages))
        self._last_result = result
        return result
