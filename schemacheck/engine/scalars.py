"""Validators for null, boolean, integer and number nodes."""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any

from schemacheck.engine.base import BaseValidator
from schemacheck.engine.codec import compact_preview
from schemacheck.engine.errors import ErrorKind
from schemacheck.engine.values import is_integer, is_number

RANGE_KEYWORDS = ("minimum", "exclusiveMinimum", "maximum", "exclusiveMaximum")


def _num(value: Any) -> str:
    return compact_preview(value, 32)


class NullValidator(BaseValidator):
    type_description = "null"

    def matches_type(self, value: Any) -> bool:
        return value is None


class BooleanValidator(BaseValidator):
    type_description = "boolean"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, bool)


class NumberValidator(BaseValidator):
    """
    multipleOf and range checks.

    From draft-06 on, exclusiveMinimum/exclusiveMaximum are thresholds of
    their own; in draft-04 they are booleans that make minimum/maximum
    exclusive.
    """

    type_description = "a number"

    def matches_type(self, value: Any) -> bool:
        return is_number(value)

    def is_valid_keywords(self, value: Any) -> bool:
        result = True

        if "multipleOf" in self.schema and not self._is_valid_multiple_of(value):
            result = False

        if any(keyword in self.schema for keyword in RANGE_KEYWORDS):
            valid = (
                self._is_valid_range_v6(value)
                if self.version >= 6
                else self._is_valid_range_v4(value)
            )
            if not valid:
                result = False

        return result

    def _is_valid_multiple_of(self, value: int | float) -> bool:
        divisor = self.schema["multipleOf"]
        if not is_number(divisor) or divisor <= 0:
            return self.fail(
                ErrorKind.SCHEMA_ERROR,
                f"multipleOf must be a number greater than 0, given: {compact_preview(divisor, 20)}",
            )

        if is_integer(value) and is_integer(divisor):
            remainder = value % divisor
        else:
            try:
                remainder = math.fmod(value, divisor)
            except OverflowError:
                # integers beyond float range
                remainder = Fraction(value) % Fraction(divisor)

        if remainder != 0:
            return self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"value must be a multiple of {_num(divisor)}, given: {_num(value)}",
            )
        return True

    def _has_numeric_thresholds(self, keywords: tuple[str, ...]) -> bool:
        result = True
        for keyword in keywords:
            threshold = self.schema.get(keyword)
            if threshold is not None and not is_number(threshold):
                result = self.fail(
                    ErrorKind.SCHEMA_ERROR,
                    f"{keyword} must be a number, given: {compact_preview(threshold, 20)}",
                )
        return result

    def _is_valid_range_v6(self, value: int | float) -> bool:
        if not self._has_numeric_thresholds(RANGE_KEYWORDS):
            return False

        result = True
        minimum = self.schema.get("minimum")
        if minimum is not None and value < minimum:
            result = self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"value {_num(value)} is less than minimum of {_num(minimum)}",
            )

        exclusive_minimum = self.schema.get("exclusiveMinimum")
        if exclusive_minimum is not None and value <= exclusive_minimum:
            result = self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"value {_num(value)} is less than or equal to exclusive minimum of {_num(exclusive_minimum)}",
            )

        maximum = self.schema.get("maximum")
        if maximum is not None and value > maximum:
            result = self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"value {_num(value)} is greater than maximum of {_num(maximum)}",
            )

        exclusive_maximum = self.schema.get("exclusiveMaximum")
        if exclusive_maximum is not None and value >= exclusive_maximum:
            result = self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"value {_num(value)} is greater than or equal to exclusive maximum of {_num(exclusive_maximum)}",
            )

        return result

    def _is_valid_range_v4(self, value: int | float) -> bool:
        if not self._has_numeric_thresholds(("minimum", "maximum")):
            return False

        result = True
        minimum = self.schema.get("minimum")
        if minimum is not None:
            if value < minimum:
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"value {_num(value)} is less than minimum of {_num(minimum)}",
                )
            elif self.schema.get("exclusiveMinimum") and value <= minimum:
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"value {_num(value)} is less than or equal to exclusive minimum of {_num(minimum)}",
                )

        maximum = self.schema.get("maximum")
        if maximum is not None:
            if value > maximum:
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"value {_num(value)} is greater than maximum of {_num(maximum)}",
                )
            elif self.schema.get("exclusiveMaximum") and value >= maximum:
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"value {_num(value)} is greater than or equal to exclusive maximum of {_num(maximum)}",
                )

        return result


class IntegerValidator(NumberValidator):
    type_description = "an integer"

    def matches_type(self, value: Any) -> bool:
        return is_integer(value)
