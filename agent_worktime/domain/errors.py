"""Typed failures raised by the work-time accumulator.

Every error carries a FailureKind so callers that prefer a result value
over exceptions (see ``WorkTimeAccumulator.ingest``) can branch on the
kind without matching exception classes.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    OWNER_MISMATCH = "owner_mismatch"
    CHRONOLOGY_VIOLATION = "chronology_violation"
    DEVICE_MISMATCH = "device_mismatch"
    EMPTY_RESULT = "empty_result"
    MALFORMED_EVENT = "malformed_event"


class WorkTimeError(Exception):
    """Base class for accumulator failures."""

    kind: FailureKind


class OwnerMismatchError(WorkTimeError):
    """Raised when an event belongs to a different agent than the accumulator."""

    kind = FailureKind.OWNER_MISMATCH

    def __init__(self, expected: str, given: str) -> None:
        self.expected = expected
        self.given = given
        super().__init__(f"Owner mismatch. Expected [{expected}], given [{given}].")


class ChronologyViolationError(WorkTimeError):
    """Raised when an event is older than the last accepted one."""

    kind = FailureKind.CHRONOLOGY_VIOLATION

    def __init__(self, last_time: int, given_time: int) -> None:
        self.last_time = last_time
        self.given_time = given_time
        super().__init__(
            f"Status event is not sorted by time. Last accepted [{last_time}], given [{given_time}]."
        )


class DeviceMismatchError(WorkTimeError):
    """Raised when a logged-in agent reports from a different device."""

    kind = FailureKind.DEVICE_MISMATCH

    def __init__(self, expected: str, given: str | None) -> None:
        self.expected = expected
        self.given = given
        super().__init__(f"Device mismatch. Expected [{expected}], given [{given}].")


class EmptyResultError(WorkTimeError):
    """Raised when a snapshot is requested before any event was ingested."""

    kind = FailureKind.EMPTY_RESULT


class ExtractionError(ValueError):
    """Raised when a raw record cannot be mapped to a StatusEvent."""

    kind = FailureKind.MALFORMED_EVENT
