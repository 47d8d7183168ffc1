"""Array nodes: items (single schema or tuple), additionalItems, contains, size, uniqueness."""

from __future__ import annotations

from typing import Any

from schemacheck.engine.base import BaseValidator
from schemacheck.engine.codec import compact_preview
from schemacheck.engine.errors import ErrorKind
from schemacheck.engine.values import is_number, is_vector, label_index, strict_equal


class ArrayValidator(BaseValidator):
    type_description = "an array"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, list)

    def is_valid_keywords(self, value: Any) -> bool:
        result = True

        if "items" in self.schema:
            items = self.schema["items"]
            valid = (
                self._is_valid_items_tuple(value, items)
                if is_vector(items)
                else self._is_valid_items_schema(value, items)
            )
            if not valid:
                result = False

        if "contains" in self.schema and self.version >= 6 and not self._is_valid_contains(value):
            result = False

        if ("minItems" in self.schema or "maxItems" in self.schema) and not self._is_valid_size(value):
            result = False

        if self.schema.get("uniqueItems") is True and not self._is_valid_unique(value):
            result = False

        return result

    def _is_valid_items_schema(self, value: list, schema: Any) -> bool:
        result = True
        for index, item in enumerate(value):
            if not self.session.validate_subschema(schema, item, label_index(self.label, index)):
                result = False
        return result

    def _is_valid_items_tuple(self, value: list, schemas: list) -> bool:
        result = True
        additional = self.schema.get("additionalItems")

        for index, item in enumerate(value):
            item_label = label_index(self.label, index)
            if index < len(schemas):
                if not self.session.validate_subschema(schemas[index], item, item_label):
                    result = False
            elif additional is False:
                result = self.fail(ErrorKind.KEYWORD_VIOLATION, "additional items forbidden", item_label)
                break
            elif additional is not None and additional is not True:
                if not self.session.validate_subschema(additional, item, item_label):
                    result = False

        return result

    def _is_valid_contains(self, value: list) -> bool:
        schema = self.schema["contains"]
        for item in value:
            if self.session.validate_subschema(schema, item, None):
                return True
        return self.fail(ErrorKind.KEYWORD_VIOLATION, "array does not contain required item")

    def _is_valid_size(self, value: list) -> bool:
        result = True
        count = len(value)

        min_items = self.schema.get("minItems")
        if is_number(min_items) and count < min_items:
            result = self.fail(ErrorKind.KEYWORD_VIOLATION, f"too few items (min {min_items}), given: {count}")

        max_items = self.schema.get("maxItems")
        if is_number(max_items) and count > max_items:
            result = self.fail(ErrorKind.KEYWORD_VIOLATION, f"too many items (max {max_items}), given: {count}")

        return result

    def _is_valid_unique(self, value: list) -> bool:
        result = True
        for index, item in enumerate(value):
            if any(strict_equal(earlier, item) for earlier in value[:index]):
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"array items must be unique, duplicate: {compact_preview(item, 20)}",
                    label_index(self.label, index),
                )
        return result
