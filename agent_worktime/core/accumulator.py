"""WorkTimeAccumulator — per-agent work-time state machine.

One accumulator tracks one agent over one reporting window.  Events are
pushed one at a time in chronological order; each event passes the
EventValidator, bumps the raw event counter, and is then dispatched to
the transition handler for its status category.  Handlers close the
interval of the outgoing status in the TimerLedger and count every
status that actually becomes current.

The real state is the tuple (current, pending, pre_login, logged_in,
on_call):
    - current:   the status whose duration is accruing.
    - pending:   a status deferred while a call is in progress.  At call
                 begin it holds the pre-call status, which is restored at
                 call end unless a newer idle status or a logout replaced it.
    - pre_login: the status received (or in effect) while logged out,
                 restored on the next login.

Thread-safety note:
    An accumulator is single-writer.  Callers feeding the same agent
    from several tasks must serialise access (WorkTimeStore does).
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from agent_worktime.adapters.base import EventAdapter
from agent_worktime.adapters.field_mapping import FieldMappingAdapter
from agent_worktime.core.ledger import OccurrenceCounter, TimerLedger
from agent_worktime.core.options import WorkTimeOptions
from agent_worktime.core.validator import EventValidator
from agent_worktime.domain.enums import StatusCategory
from agent_worktime.domain.errors import EmptyResultError, ExtractionError, WorkTimeError
from agent_worktime.domain.snapshot import CurrentStatusView, IngestOutcome, WorkTimeSnapshot
from agent_worktime.domain.status import Status, StatusEvent
from agent_worktime.foundation.clock import to_iso

logger = logging.getLogger(__name__)


class WorkTimeAccumulator:
    """Event-driven work-time calculator for a single agent.

    Args:
        owner_id: Agent this accumulator is bound to.  ``None`` disables
            the owner check.
        options: Field mapping and validation policy.
        adapter: Strategy that turns raw records into StatusEvents.
            Defaults to a FieldMappingAdapter built from *options*.
    """

    def __init__(
        self,
        owner_id: str | None = None,
        options: WorkTimeOptions | None = None,
        adapter: EventAdapter | None = None,
    ) -> None:
        self.owner_id = owner_id
        self.options = options or WorkTimeOptions()
        self._adapter = adapter or FieldMappingAdapter(self.options)
        self._validator = EventValidator(self.options)

        self.timers = TimerLedger()
        self.event_counters = OccurrenceCounter()
        self.status_counters = OccurrenceCounter()
        self.devices: dict[str, None] = {}

        self.current_status: Status | None = None
        self.pending_status: Status | None = None
        self.pre_login_status: Status | None = None

        self.current_device_id: str | None = None
        self.first_status_time: int | None = None
        self.last_status_time: int | None = None
        self.last_login_time: int | None = None
        self.last_event_time: int | None = None

        # The window may open mid-session; the first login resets timers
        self.is_logged_in = True
        self.is_on_call = False
        self.is_available = False

    # ── Ingestion ────────────────────────────────────────────────────────

    def add_event(self, event: StatusEvent | Mapping[str, Any]) -> WorkTimeAccumulator:
        """Apply one event, raising a WorkTimeError if validation rejects it.

        Raw mappings are converted with the configured adapter first.  A
        rejected event leaves all accumulated state untouched.
        """
        if not isinstance(event, StatusEvent):
            event = self._adapter.adapt(event)

        self._validator.check(self, event)
        self.event_counters.increment(event.category)
        self.last_event_time = event.timestamp

        self._apply(event)

        if self.is_logged_in and event.device_id:
            self.devices.setdefault(event.device_id, None)

        if self.first_status_time is None:
            self.first_status_time = event.timestamp
        return self

    def ingest(self, event: StatusEvent | Mapping[str, Any]) -> IngestOutcome:
        """Result-returning variant of add_event()."""
        try:
            self.add_event(event)
        except (WorkTimeError, ExtractionError) as exc:
            logger.warning("Rejected event for owner %s: %s", self.owner_id, exc)
            return IngestOutcome.rejected(exc.kind, str(exc))
        return IngestOutcome.ok()

    # ── Snapshot ─────────────────────────────────────────────────────────

    def snapshot(self) -> WorkTimeSnapshot:
        """Immutable projection of everything accumulated so far."""
        if self.first_status_time is None:
            raise EmptyResultError("Work time is empty.")

        current = self.current_status
        return WorkTimeSnapshot(
            owner_id=self.owner_id,
            current_device_id=self.current_device_id,
            current_status=(
                CurrentStatusView(code=int(current.code), name=current.name)
                if current else None
            ),
            is_logged_in=self.is_logged_in,
            is_on_call=self.is_on_call,
            is_available=self.is_available,
            event_counters=self.event_counters.to_dict(),
            status_counters=self.status_counters.to_dict(),
            timers=self.timers.to_dict(),
            logged_in_duration=self.timers.logged_in_total,
            devices=list(self.devices),
            first_status_time=self.first_status_time,
            first_status_time_h=to_iso(self.first_status_time),
            last_status_time=self.last_status_time,
            last_status_time_h=to_iso(self.last_status_time),
            last_login_time=self.last_login_time,
            last_login_time_h=to_iso(self.last_login_time),
        )

    @property
    def is_empty(self) -> bool:
        return self.first_status_time is None

    # ── Transition engine ────────────────────────────────────────────────

    def _apply(self, event: StatusEvent) -> None:
        new_status = Status.from_event(event)
        category = new_status.code

        if category.is_idle:
            self._on_idle(new_status)
        elif category is StatusCategory.LOGOUT:
            self._on_logout(new_status)
        elif category is StatusCategory.LOGIN:
            self._on_login(new_status, event.device_id)
        elif category is StatusCategory.CALL_BEGIN:
            self._on_call_begin(new_status)
        elif category is StatusCategory.CALL_END:
            self._on_call_end(new_status)
        else:
            logger.debug("Ignoring unsupported status code %d", event.status_code)

    def _on_idle(self, new_status: Status) -> None:
        if not self.is_logged_in:
            self.pre_login_status = new_status
            return

        if self.current_status and self.current_status.code is new_status.code:
            return

        if self.is_on_call:
            self.pending_status = new_status
            return

        self.timers.close_interval(self.current_status, new_status)
        self._set_current(new_status)
        self.is_available = new_status.code is StatusCategory.AVAILABLE
        self.last_status_time = new_status.time

    def _on_logout(self, new_status: Status) -> None:
        if not self.is_logged_in:
            return

        if self.is_on_call:
            self.pending_status = new_status
            return

        self.timers.close_interval(self.current_status, new_status)
        self._set_current(new_status)
        self.is_logged_in = False
        self.is_available = False
        self.last_status_time = new_status.time
        self.current_device_id = None

    def _on_login(self, new_status: Status, device_id: str | None) -> None:
        if self.is_logged_in and self.last_login_time is not None and self.current_status:
            return

        restore_in_place = False
        if self.is_logged_in and self.last_login_time is None:
            # First login opens the tracked window
            self.timers.reset()
            if self.current_status:
                self.pre_login_status = self.current_status
                restore_in_place = True

        if not self.is_logged_in:
            stashed = self.pre_login_status
            if stashed and stashed.code is StatusCategory.CALL_BEGIN:
                self.timers.close_interval(self.current_status, stashed)
                self.is_on_call = True
            else:
                self.timers.close_interval(self.current_status, new_status)

        if self.pre_login_status is None:
            self._set_current(Status.available(new_status.time))
            self.is_available = True
        else:
            restored = self.pre_login_status
            if restored.code is not StatusCategory.CALL_BEGIN:
                restored = restored.at(new_status.time)

            if restore_in_place:
                self.current_status = restored
            else:
                self._set_current(restored)

            self.is_available = restored.code is StatusCategory.AVAILABLE
            self.is_on_call = restored.code is StatusCategory.CALL_BEGIN
            self.pre_login_status = None

        self.is_logged_in = True
        self.last_login_time = new_status.time
        self.last_status_time = new_status.time
        self.current_device_id = device_id

    def _on_call_begin(self, new_status: Status) -> None:
        if not self.is_logged_in:
            self.pre_login_status = new_status
            return

        if self.is_on_call:
            return

        self.timers.close_interval(self.current_status, new_status)
        self.pending_status = self.current_status or Status.available(new_status.time)
        self._set_current(new_status)
        self.is_on_call = True
        self.is_available = False
        self.last_status_time = new_status.time

    def _on_call_end(self, new_status: Status) -> None:
        if self.current_status is None or self.current_status.code is not StatusCategory.CALL_BEGIN:
            return

        if not self.is_logged_in:
            return

        self.timers.close_interval(self.current_status, new_status)

        if self.pending_status:
            # Call end is a transition of its own only when a successor is queued
            self.status_counters.increment(StatusCategory.CALL_END)
            restored = self.pending_status.at(new_status.time)
            self._set_current(restored)
            if restored.code is StatusCategory.LOGOUT:
                self.is_logged_in = False
                self.current_device_id = None
        else:
            # Call restored by a login carries no pre-call status
            self._set_current(Status.available(new_status.time))

        self.pending_status = None
        self.is_on_call = False
        self.is_available = self.current_status.code is StatusCategory.AVAILABLE
        self.last_status_time = new_status.time

    # ── Helpers ──────────────────────────────────────────────────────────

    def _set_current(self, status: Status) -> None:
        self.current_status = status
        self.status_counters.increment(status.code)
        logger.debug(
            "Owner %s -> %s at %d", self.owner_id, status.code.label, status.time
        )

    # ── Dunder ───────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        current = self.current_status.code.label if self.current_status else None
        return (
            f"WorkTimeAccumulator(owner={self.owner_id!s}, "
            f"current={current}, "
            f"logged_in={self.is_logged_in}, "
            f"on_call={self.is_on_call})"
        )
