"""TimerLedger and OccurrenceCounter — the accumulator's numeric state.

Both start with every key of their fixed set present and zero-valued, so
a snapshot never has to distinguish "missing" from "zero".
"""

from __future__ import annotations

import logging

from agent_worktime.domain.enums import StatusCategory, TimerBucket
from agent_worktime.domain.status import Status

logger = logging.getLogger(__name__)


class TimerLedger:
    """Accumulated milliseconds per timer bucket."""

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: dict[TimerBucket, int] = {bucket: 0 for bucket in TimerBucket}

    def close_interval(self, old: Status | None, new: Status | None) -> int:
        """Attribute ``new.time - old.time`` to the bucket of *old*.

        Returns the increment actually applied.  A negative interval can
        only come from an out-of-order event accepted in lenient mode; it
        is clamped to zero.
        """
        if old is None or new is None:
            return 0

        bucket = TimerBucket.for_category(old.code)
        if bucket is None:
            return 0

        elapsed = new.time - old.time
        if elapsed < 0:
            logger.warning(
                "Negative interval for %s (%d -> %d) clamped to zero",
                bucket.value,
                old.time,
                new.time,
            )
            return 0

        self._buckets[bucket] += elapsed
        return elapsed

    def reset(self) -> None:
        for bucket in self._buckets:
            self._buckets[bucket] = 0

    def get(self, bucket: TimerBucket) -> int:
        return self._buckets[bucket]

    @property
    def logged_in_total(self) -> int:
        """Sum of every bucket except logout."""
        return sum(v for k, v in self._buckets.items() if k is not TimerBucket.LOGOUT)

    def to_dict(self) -> dict[str, int]:
        return {bucket.value: value for bucket, value in self._buckets.items()}


class OccurrenceCounter:
    """Occurrence counts keyed by status category."""

    __slots__ = ("_counts",)

    def __init__(self) -> None:
        self._counts: dict[StatusCategory, int] = {cat: 0 for cat in StatusCategory}

    def increment(self, category: StatusCategory) -> None:
        self._counts[category] += 1

    def get(self, category: StatusCategory) -> int:
        return self._counts[category]

    def to_dict(self) -> dict[str, int]:
        return {cat.label: value for cat, value in self._counts.items()}
