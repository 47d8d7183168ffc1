"""
Helpers over decoded JSON values.

A decoded value is one of None, bool, int, float, str, list or dict.
bool is a subclass of int in Python, so every check here tests for bool
first; int and float stay distinct as well.
"""

from __future__ import annotations

from typing import Any


def json_type(value: Any) -> str:
    """Name of the JSON type of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_vector(value: Any) -> bool:
    """Whether a schema value is a positional list (tuple-mode items, name lists)."""
    return isinstance(value, list)


def strict_equal(left: Any, right: Any) -> bool:
    """
    Structural equality with JSON types kept apart.

    1, 1.0, True and "1" are all different; lists compare in order,
    objects compare by key set regardless of member order.
    """
    if json_type(left) != json_type(right):
        return False
    if isinstance(left, list):
        return len(left) == len(right) and all(
            strict_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict):
        if left.keys() != right.keys():
            return False
        return all(strict_equal(left[key], right[key]) for key in left)
    return left == right


def label_property(label: str | None, name: str) -> str | None:
    if label is None:
        return None
    return f"#/{name}" if label == "#/" else f"{label}/{name}"


def label_index(label: str | None, index: int) -> str | None:
    if label is None:
        return None
    return f"{label}[{index}]"
