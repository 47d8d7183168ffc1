"""
Error records produced while validating.

Validators never raise for bad data: every failure becomes a
ValidationMessage appended to an ErrorAccumulator, tagged with a kind and
the context path where it happened. Exceptions defined here only travel
between the resolver/loader and the validation session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    TYPE_MISMATCH = "type_mismatch"
    KEYWORD_VIOLATION = "keyword_violation"
    COMBINATOR_VIOLATION = "combinator_violation"
    SCHEMA_ERROR = "schema_error"
    REFERENCE_ERROR = "reference_error"
    REFERENCE_CYCLE = "reference_cycle"
    DECODE_ERROR = "decode_error"


@dataclass(frozen=True)
class ValidationMessage:
    """One diagnostic: what went wrong and where."""

    kind: ErrorKind
    problem: str
    path: str | None = None

    def __str__(self) -> str:
        if self.path is None:
            return self.problem
        return f"{self.problem} at context path: {self.path}"


@dataclass
class ErrorAccumulator:
    """Append-only, ordered list of messages for one validation call."""

    messages: list[ValidationMessage] = field(default_factory=list)

    def add(self, kind: ErrorKind, problem: str, label: str | None) -> None:
        # no label means the caller only wants the boolean outcome
        if label is None:
            return
        self.messages.append(ValidationMessage(kind=kind, problem=problem, path=label))

    def add_unlabeled(self, kind: ErrorKind, problem: str) -> None:
        """Record a document-level message that has no context path."""
        self.messages.append(ValidationMessage(kind=kind, problem=problem))

    def extend(self, other: ErrorAccumulator | list[ValidationMessage]) -> None:
        items = other.messages if isinstance(other, ErrorAccumulator) else other
        self.messages.extend(items)

    def as_strings(self) -> list[str]:
        return [str(message) for message in self.messages]

    def __len__(self) -> int:
        return len(self.messages)

    def __bool__(self) -> bool:
        return bool(self.messages)


class DocumentLoadError(Exception):
    """Raised by the loader when an external schema document cannot be read."""


class RefResolutionError(Exception):
    """Raised when a ``$ref`` cannot be turned into a schema node."""

    def __init__(self, ref: str, reason: str):
        super().__init__(f"cannot resolve $ref {ref!r}: {reason}")
        self.ref = ref
        self.reason = reason
