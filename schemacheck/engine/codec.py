"""JSON text codec used by the engine: decoding input text and previewing values in messages."""

from __future__ import annotations

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a JSON value")


def parse(text: str | bytes) -> Any:
    """Decode JSON text. Raises ``ValueError`` on malformed input, NaN and Infinity included."""
    return json.loads(text, parse_constant=_reject_constant)


def compact_preview(value: Any, max_len: int) -> str:
    """
    Render a value as compact JSON, cut to ``max_len`` characters.

    Truncated output gets a trailing ``...``.
    """
    compact = json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    if len(compact) <= max_len:
        return compact
    return f"{compact[:max_len].rstrip()}..."
