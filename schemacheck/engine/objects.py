"""
Object nodes.

Members named in ``properties`` are validated against their schema; the
rest are "additional". ``patternProperties`` takes the additional members
whose key matches one of its expressions, and whatever is left after that
is what ``additionalProperties`` applies to.
"""

from __future__ import annotations

from typing import Any

import regex

from schemacheck.engine.base import BaseValidator
from schemacheck.engine.codec import compact_preview
from schemacheck.engine.errors import ErrorKind
from schemacheck.engine.strings import compile_pattern
from schemacheck.engine.values import is_number, is_vector, label_property


class ObjectValidator(BaseValidator):
    type_description = "an object"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, dict)

    def is_valid_keywords(self, value: Any) -> bool:
        result = True

        properties = self.schema.get("properties")
        if isinstance(properties, dict):
            additional = [name for name in value if name not in properties]
            if not self._is_valid_properties(value, properties):
                result = False
        else:
            additional = list(value)

        pattern_properties = self.schema.get("patternProperties")
        if isinstance(pattern_properties, dict):
            valid, additional = self._is_valid_pattern_properties(value, pattern_properties, additional)
            if not valid:
                result = False

        if "additionalProperties" in self.schema and not self._is_valid_additional_properties(value, additional):
            result = False

        required = self.schema.get("required")
        if isinstance(required, list) and not self._is_valid_required(value, required):
            result = False

        if "propertyNames" in self.schema and self.version >= 6 and not self._is_valid_property_names(value):
            result = False

        if ("minProperties" in self.schema or "maxProperties" in self.schema) and not self._is_valid_size(value):
            result = False

        dependencies = self.schema.get("dependencies")
        if isinstance(dependencies, dict) and not self._is_valid_dependencies(value, dependencies):
            result = False

        return result

    def _is_valid_properties(self, value: dict, properties: dict) -> bool:
        result = True
        for name, schema in properties.items():
            if name in value:
                if not self.session.validate_subschema(schema, value[name], label_property(self.label, name)):
                    result = False
        return result

    def _is_valid_pattern_properties(
        self, value: dict, pattern_properties: dict, additional: list[str]
    ) -> tuple[bool, list[str]]:
        result = True
        matched: set[str] = set()

        for pattern, schema in pattern_properties.items():
            try:
                compiled = compile_pattern(pattern)
            except regex.error as exc:
                result = self.fail(
                    ErrorKind.SCHEMA_ERROR,
                    f"patternProperties key {compact_preview(pattern, 64)} is not a valid regular expression: {exc}",
                )
                continue

            for name in additional:
                if compiled.search(name) is None:
                    continue
                matched.add(name)
                if not self.session.validate_subschema(schema, value[name], label_property(self.label, name)):
                    result = False

        return result, [name for name in additional if name not in matched]

    def _is_valid_additional_properties(self, value: dict, additional: list[str]) -> bool:
        schema = self.schema["additionalProperties"]

        if schema is False:
            if not additional:
                return True
            return self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"additional properties forbidden: {', '.join(additional)}",
            )

        if schema is True or not isinstance(schema, (dict, bool)):
            return True

        result = True
        for name in additional:
            if not self.session.validate_subschema(schema, value[name], label_property(self.label, name)):
                result = False
        return result

    def _is_valid_required(self, value: dict, required: list) -> bool:
        if self.version <= 4 and not required:
            return self.fail(ErrorKind.SCHEMA_ERROR, 'D4: "required" must contain at least one string')

        missing = [str(name) for name in required if not (isinstance(name, str) and name in value)]
        if missing:
            return self.fail(ErrorKind.KEYWORD_VIOLATION, f"missing properties: {', '.join(missing)}")
        return True

    def _is_valid_property_names(self, value: dict) -> bool:
        schema = self.schema["propertyNames"]
        # keys are strings: the name schema gets an implicit string type
        if isinstance(schema, dict) and "type" not in schema:
            schema = {**schema, "type": "string"}

        result = True
        for name in value:
            if not self.session.validate_subschema(schema, name, label_property(self.label, name)):
                result = False
        return result

    def _is_valid_size(self, value: dict) -> bool:
        result = True
        count = len(value)

        min_properties = self.schema.get("minProperties")
        if is_number(min_properties) and count < min_properties:
            result = self.fail(ErrorKind.KEYWORD_VIOLATION, f"too few properties (min {min_properties})")

        max_properties = self.schema.get("maxProperties")
        if is_number(max_properties) and count > max_properties:
            result = self.fail(ErrorKind.KEYWORD_VIOLATION, f"too many properties (max {max_properties})")

        return result

    def _is_valid_dependencies(self, value: dict, dependencies: dict) -> bool:
        result = True

        for name, dependency in dependencies.items():
            if name not in value:
                continue

            if is_vector(dependency):
                missing = [str(other) for other in dependency if not (isinstance(other, str) and other in value)]
                if missing:
                    joined = '", "'.join(missing)
                    result = self.fail(
                        ErrorKind.KEYWORD_VIOLATION,
                        f'missing dependant properties: "{joined}" (depending on "{name}")',
                    )
                continue

            if isinstance(dependency, dict) and "type" not in dependency:
                dependency = {**dependency, "type": "object"}
            if not self.session.validate_subschema(dependency, value, self.label):
                result = False

        return result
