"""
Keywords every schema node understands, whatever its type.

BaseValidator is also the validator used for nodes without a (known)
``type``. Typed validators subclass it and fill in ``matches_type`` and
``is_valid_keywords``; ``is_valid`` ties the three stages together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schemacheck.engine.codec import compact_preview
from schemacheck.engine.errors import ErrorAccumulator, ErrorKind
from schemacheck.engine.values import strict_equal

if TYPE_CHECKING:
    from schemacheck.engine.schema import ValidationSession


class BaseValidator:
    """enum, const, anyOf, allOf, oneOf, not and if/then/else."""

    type_description = "any value"

    def __init__(self, schema: dict[str, Any], label: str | None, session: ValidationSession):
        self.schema = schema
        self.label = label
        self.session = session
        self.errors = ErrorAccumulator()

    @property
    def version(self) -> int:
        return self.session.version

    def fail(self, kind: ErrorKind, problem: str, label: str | None = None) -> bool:
        self.errors.add(kind, problem, label if label is not None else self.label)
        return False

    def is_valid(self, value: Any) -> bool:
        if not self.matches_type(value):
            return self.fail(
                ErrorKind.TYPE_MISMATCH,
                f"value {compact_preview(value, 64)} must be {self.type_description}",
            )

        result = self.is_valid_keywords(value)
        if not self.is_valid_combinators(value):
            result = False
        return result

    def matches_type(self, value: Any) -> bool:
        return True

    def is_valid_keywords(self, value: Any) -> bool:
        return True

    def is_valid_combinators(self, value: Any) -> bool:
        result = True

        if isinstance(self.schema.get("enum"), list) and not self._is_valid_enum(value):
            result = False

        if "const" in self.schema and self.version >= 6 and not self._is_valid_const(value):
            result = False

        if isinstance(self.schema.get("anyOf"), list) and not self._is_valid_any_of(value):
            result = False

        if isinstance(self.schema.get("allOf"), list) and not self._is_valid_all_of(value):
            result = False

        if isinstance(self.schema.get("oneOf"), list) and not self._is_valid_one_of(value):
            result = False

        if "not" in self.schema and not self._is_valid_not(value):
            result = False

        if "if" in self.schema and self.version >= 7 and not self._is_valid_if(value):
            result = False

        return result

    def _is_valid_enum(self, value: Any) -> bool:
        if any(strict_equal(candidate, value) for candidate in self.schema["enum"]):
            return True
        return self.fail(
            ErrorKind.COMBINATOR_VIOLATION,
            f"value {compact_preview(value, 20)} is not one of a list",
        )

    def _is_valid_const(self, value: Any) -> bool:
        if strict_equal(self.schema["const"], value):
            return True
        return self.fail(
            ErrorKind.COMBINATOR_VIOLATION,
            f"value {compact_preview(value, 20)} is not a defined constant",
        )

    def _is_valid_any_of(self, value: Any) -> bool:
        for subschema in self.schema["anyOf"]:
            if self.session.validate_subschema(subschema, value, None):
                return True
        return self.fail(
            ErrorKind.COMBINATOR_VIOLATION,
            f"value {compact_preview(value, 20)} does not match any subschema",
        )

    def _is_valid_all_of(self, value: Any) -> bool:
        for subschema in self.schema["allOf"]:
            if not self.session.validate_subschema(subschema, value, None):
                return self.fail(
                    ErrorKind.COMBINATOR_VIOLATION,
                    f"value {compact_preview(value, 20)} does not match all subschemas",
                )
        return True

    def _is_valid_one_of(self, value: Any) -> bool:
        matched = False
        for subschema in self.schema["oneOf"]:
            if self.session.validate_subschema(subschema, value, None):
                if matched:
                    return self.fail(ErrorKind.COMBINATOR_VIOLATION, "several matches found")
                matched = True

        if not matched:
            return self.fail(ErrorKind.COMBINATOR_VIOLATION, "no match found")
        return True

    def _is_valid_not(self, value: Any) -> bool:
        if self.session.validate_subschema(self.schema["not"], value, None):
            return self.fail(
                ErrorKind.COMBINATOR_VIOLATION,
                f"value {compact_preview(value, 20)} matched a forbidden subschema",
            )
        return True

    def _is_valid_if(self, value: Any) -> bool:
        # missing branches accept everything
        if self.session.validate_subschema(self.schema["if"], value, None):
            branch = self.schema.get("then", True)
        else:
            branch = self.schema.get("else", True)
        return self.session.validate_subschema(branch, value, self.label)
