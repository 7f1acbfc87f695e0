"""Controlled enumerations for the work-time domain.

Status codes are fixed by the telephony platform.  Timer buckets are the
fixed set of duration accumulators every accumulator starts with.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class StatusCategory(IntEnum):
    """Agent status codes as emitted by the telephony platform."""

    UNKNOWN = 0
    AVAILABLE = 1
    MEETING = 2
    DO_NOT_DISTURB = 3
    BREAK = 4
    OUT_TO_LUNCH = 5
    LOGOUT = 6
    LOGIN = 7
    CALL_BEGIN = 8
    CALL_END = 9

    @classmethod
    def resolve(cls, code: int) -> StatusCategory:
        """Map a raw code to a category, falling back to UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        """Counter key used in snapshots."""
        return _LABELS[self]

    @property
    def is_idle(self) -> bool:
        return self in IDLE_CATEGORIES


_LABELS: dict[StatusCategory, str] = {
    StatusCategory.UNKNOWN: "unknown",
    StatusCategory.AVAILABLE: "available",
    StatusCategory.MEETING: "meeting",
    StatusCategory.DO_NOT_DISTURB: "do not disturb",
    StatusCategory.BREAK: "break",
    StatusCategory.OUT_TO_LUNCH: "out to lunch",
    StatusCategory.LOGOUT: "logout",
    StatusCategory.LOGIN: "login",
    StatusCategory.CALL_BEGIN: "call begin",
    StatusCategory.CALL_END: "call end",
}

IDLE_CATEGORIES: frozenset[StatusCategory] = frozenset({
    StatusCategory.AVAILABLE,
    StatusCategory.MEETING,
    StatusCategory.DO_NOT_DISTURB,
    StatusCategory.BREAK,
    StatusCategory.OUT_TO_LUNCH,
})


class TimerBucket(str, Enum):
    """Named duration accumulators.  "login" is derived, never a bucket."""

    AVAILABLE = "available"
    MEETING = "meeting"
    DO_NOT_DISTURB = "do not disturb"
    BREAK = "break"
    OUT_TO_LUNCH = "out to lunch"
    LOGOUT = "logout"
    IN_CALL = "in call"

    @classmethod
    def for_category(cls, category: StatusCategory) -> TimerBucket | None:
        """Bucket that accrues time while *category* is current.

        CallBegin accrues into IN_CALL.  Login, CallEnd and Unknown never
        become current and have no bucket.
        """
        return _BUCKETS.get(category)


_BUCKETS: dict[StatusCategory, TimerBucket] = {
    StatusCategory.AVAILABLE: TimerBucket.AVAILABLE,
    StatusCategory.MEETING: TimerBucket.MEETING,
    StatusCategory.DO_NOT_DISTURB: TimerBucket.DO_NOT_DISTURB,
    StatusCategory.BREAK: TimerBucket.BREAK,
    StatusCategory.OUT_TO_LUNCH: TimerBucket.OUT_TO_LUNCH,
    StatusCategory.LOGOUT: TimerBucket.LOGOUT,
    StatusCategory.CALL_BEGIN: TimerBucket.IN_CALL,
}
