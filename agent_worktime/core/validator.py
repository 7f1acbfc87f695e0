"""EventValidator — owner, chronology and device checks run before the engine.

The validator reads accumulator state but never changes it.  In lenient
mode every check is skipped and the event reaches the engine unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agent_worktime.core.options import WorkTimeOptions
from agent_worktime.domain.errors import (
    ChronologyViolationError,
    DeviceMismatchError,
    OwnerMismatchError,
)
from agent_worktime.domain.status import StatusEvent

if TYPE_CHECKING:
    from agent_worktime.core.accumulator import WorkTimeAccumulator


class EventValidator:
    """Strict/lenient gate in front of the status transition engine."""

    def __init__(self, options: WorkTimeOptions) -> None:
        self._options = options

    def check(self, accumulator: WorkTimeAccumulator, event: StatusEvent) -> None:
        """Raise a WorkTimeError subclass if *event* must not be applied."""
        if not self._options.throws:
            return

        self._check_owner(accumulator, event)
        self._check_chronology(accumulator, event)
        if self._options.check_device_id:
            self._check_device(accumulator, event)

    # ── Checks ───────────────────────────────────────────────────────────

    @staticmethod
    def _check_owner(accumulator: WorkTimeAccumulator, event: StatusEvent) -> None:
        owner = accumulator.owner_id
        if owner and event.owner_id != owner:
            raise OwnerMismatchError(owner, event.owner_id)

    @staticmethod
    def _check_chronology(accumulator: WorkTimeAccumulator, event: StatusEvent) -> None:
        last = accumulator.last_event_time
        if last is not None and event.timestamp < last:
            raise ChronologyViolationError(last, event.timestamp)

    @staticmethod
    def _check_device(accumulator: WorkTimeAccumulator, event: StatusEvent) -> None:
        bound = accumulator.current_device_id
        if not accumulator.is_logged_in or accumulator.first_status_time is None or not bound:
            return
        if event.device_id != bound:
            raise DeviceMismatchError(bound, event.device_id)
