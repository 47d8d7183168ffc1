"""String nodes: length, pattern, format and (draft-07) content keywords."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import regex

from schemacheck.engine.base import BaseValidator
from schemacheck.engine.codec import compact_preview
from schemacheck.engine.errors import ErrorKind
from schemacheck.engine.formats import FORMATS
from schemacheck.engine.values import is_number

# https://tools.ietf.org/html/rfc2045#section-6.8
BASE64_RE = regex.compile(r"[A-Za-z0-9+/\s]*={0,2}")


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> regex.Pattern:
    """
    Compile a schema regular expression. Raises ``regex.error`` when it is invalid.

    Compiled with ``regex`` so Unicode property classes (letters, scripts) are available.
    """
    return regex.compile(pattern)


class StringValidator(BaseValidator):
    type_description = "a string"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, str)

    def is_valid_keywords(self, value: Any) -> bool:
        result = True

        if ("minLength" in self.schema or "maxLength" in self.schema) and not self._is_valid_length(value):
            result = False

        if "pattern" in self.schema and not self._is_valid_pattern(value):
            result = False

        if "format" in self.schema and not self._is_valid_format(value):
            result = False

        if "contentEncoding" in self.schema and self.version >= 7 and not self._is_valid_content_encoding(value):
            result = False

        # contentMediaType is accepted as is: media type correctness is up to the application
        return result

    def _is_valid_length(self, value: str) -> bool:
        result = True
        # code points, not bytes
        length = len(value)

        min_length = self.schema.get("minLength")
        if min_length is not None:
            if not is_number(min_length):
                result = self.fail(ErrorKind.SCHEMA_ERROR, "minLength must be a number")
            elif length < min_length:
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"string min length must be {min_length}, given: {length}",
                )

        max_length = self.schema.get("maxLength")
        if max_length is not None:
            if not is_number(max_length):
                result = self.fail(ErrorKind.SCHEMA_ERROR, "maxLength must be a number")
            elif length > max_length:
                result = self.fail(
                    ErrorKind.KEYWORD_VIOLATION,
                    f"string max length must be {max_length}, given: {length}",
                )

        return result

    def _is_valid_pattern(self, value: str) -> bool:
        pattern = self.schema["pattern"]
        if not isinstance(pattern, str):
            return self.fail(ErrorKind.SCHEMA_ERROR, "pattern must be a string")
        try:
            compiled = compile_pattern(pattern)
        except regex.error as exc:
            return self.fail(
                ErrorKind.SCHEMA_ERROR,
                f"pattern {compact_preview(pattern, 64)} is not a valid regular expression: {exc}",
            )

        if compiled.search(value) is None:
            return self.fail(
                ErrorKind.KEYWORD_VIOLATION,
                f"value {compact_preview(value, 64)} does not match pattern",
            )
        return True

    def _is_valid_format(self, value: str) -> bool:
        name = self.schema["format"]
        rule = FORMATS.get(name) if isinstance(name, str) else None
        if rule is None or rule.check(value):
            return True

        if not value:
            return self.fail(ErrorKind.KEYWORD_VIOLATION, f'"{name}" format mismatch: empty string')
        return self.fail(
            ErrorKind.KEYWORD_VIOLATION,
            f'"{name}" format mismatch: {compact_preview(value, rule.preview_length)}',
        )

    def _is_valid_content_encoding(self, value: str) -> bool:
        encoding = self.schema["contentEncoding"]
        # 7bit, 8bit, binary, quoted-printable and unknown encodings are not checked
        if not isinstance(encoding, str) or encoding.lower() != "base64":
            return True

        if BASE64_RE.fullmatch(value) is None:
            return self.fail(ErrorKind.KEYWORD_VIOLATION, "content is not base64-encoded string")
        return True
