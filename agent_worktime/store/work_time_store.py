"""In-memory registry of per-agent work-time accumulators.

Design notes:
    - An asyncio.Lock guards all mutations so concurrent feed handlers
      never interleave events of the same agent.
    - One WorkTimeAccumulator per owner id, created lazily on the first
      event and sharing the store's options.  Accumulators share no
      mutable state with each other.
    - The store does NOT decide what a status means.  It routes events
      to the right accumulator and hands out snapshots.
    - close_window() returns the final snapshot and forgets the agent;
      nothing is persisted.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from agent_worktime.adapters.base import EventAdapter
from agent_worktime.adapters.field_mapping import FieldMappingAdapter
from agent_worktime.core.accumulator import WorkTimeAccumulator
from agent_worktime.core.options import WorkTimeOptions
from agent_worktime.domain.errors import ExtractionError, FailureKind
from agent_worktime.domain.snapshot import IngestOutcome, WorkTimeSnapshot
from agent_worktime.domain.status import StatusEvent

logger = logging.getLogger(__name__)


class StoreSummary:
    """Aggregate flags across all tracked agents.

    This is an observability object, not a control mechanism.
    """

    __slots__ = (
        "tracked_agents",
        "logged_in_agents",
        "on_call_agents",
        "available_agents",
    )

    def __init__(
        self,
        tracked_agents: int = 0,
        logged_in_agents: int = 0,
        on_call_agents: int = 0,
        available_agents: int = 0,
    ) -> None:
        self.tracked_agents = tracked_agents
        self.logged_in_agents = logged_in_agents
        self.on_call_agents = on_call_agents
        self.available_agents = available_agents

    def to_dict(self) -> dict:
        return {
            "tracked_agents": self.tracked_agents,
            "logged_in_agents": self.logged_in_agents,
            "on_call_agents": self.on_call_agents,
            "available_agents": self.available_agents,
        }


class WorkTimeStore:
    """Async-safe, in-memory store of one accumulator per agent.

    Args:
        options: Field mapping and validation policy for every accumulator.
        adapter: Strategy for raw records.  Defaults to a
            FieldMappingAdapter built from *options*.
    """

    def __init__(
        self,
        options: WorkTimeOptions | None = None,
        adapter: EventAdapter | None = None,
    ) -> None:
        self._options = options or WorkTimeOptions()
        self._adapter = adapter or FieldMappingAdapter(self._options)
        self._lock = asyncio.Lock()
        self._accumulators: dict[str, WorkTimeAccumulator] = {}

    # ── Public API ───────────────────────────────────────────────────────

    async def ingest(self, event: StatusEvent) -> IngestOutcome:
        """Route *event* to its agent's accumulator and apply it."""
        async with self._lock:
            accumulator = self._find_or_create(event.owner_id)
            outcome = accumulator.ingest(event)
            if outcome.accepted:
                logger.debug(
                    "Ingested %s@%d for owner %s",
                    event.category.label,
                    event.timestamp,
                    event.owner_id,
                )
            return outcome

    async def ingest_raw(self, raw: Any) -> IngestOutcome:
        """Extract a StatusEvent from *raw* with the store's adapter, then ingest it."""
        if not self._adapter.can_handle(raw):
            logger.warning("Adapter '%s' cannot handle record: %r", self._adapter.source_name, raw)
            return IngestOutcome.rejected(
                FailureKind.MALFORMED_EVENT,
                f"record not recognised by adapter '{self._adapter.source_name}'",
            )
        try:
            event = self._adapter.adapt(raw)
        except ExtractionError as exc:
            logger.warning("Adapter '%s' rejected record: %s", self._adapter.source_name, exc)
            return IngestOutcome.rejected(exc.kind, str(exc))
        return await self.ingest(event)

    async def snapshot(self, owner_id: str) -> WorkTimeSnapshot | None:
        """Snapshot of one agent, or None if the agent is not tracked.

        Raises:
            EmptyResultError: If the agent is tracked but has no accepted event.
        """
        async with self._lock:
            accumulator = self._accumulators.get(owner_id)
            if accumulator is None:
                return None
            return accumulator.snapshot()

    async def snapshots(self) -> list[WorkTimeSnapshot]:
        """Snapshots of every agent with at least one accepted event."""
        async with self._lock:
            return [
                acc.snapshot()
                for acc in self._accumulators.values()
                if not acc.is_empty
            ]

    async def close_window(self, owner_id: str) -> WorkTimeSnapshot | None:
        """Final snapshot for *owner_id*; the accumulator is discarded.

        Returns None for unknown agents and for agents that never had an
        accepted event.
        """
        async with self._lock:
            accumulator = self._accumulators.pop(owner_id, None)
            if accumulator is None:
                return None
            logger.info("Closed work-time window for owner %s", owner_id)
            if accumulator.is_empty:
                return None
            return accumulator.snapshot()

    async def owners(self) -> list[str]:
        async with self._lock:
            return list(self._accumulators)

    async def summary(self) -> StoreSummary:
        """Count agents by their current flags.  Mutates nothing."""
        async with self._lock:
            accs = list(self._accumulators.values())
            return StoreSummary(
                tracked_agents=len(accs),
                logged_in_agents=sum(1 for a in accs if not a.is_empty and a.is_logged_in),
                on_call_agents=sum(1 for a in accs if a.is_on_call),
                available_agents=sum(1 for a in accs if a.is_available),
            )

    # ── Internals ────────────────────────────────────────────────────────

    def _find_or_create(self, owner_id: str) -> WorkTimeAccumulator:
        """Must be called while holding self._lock."""
        accumulator = self._accumulators.get(owner_id)
        if accumulator is None:
            accumulator = WorkTimeAccumulator(owner_id, self._options, self._adapter)
            self._accumulators[owner_id] = accumulator
            logger.info("Opened work-time window for owner %s", owner_id)
        return accumulator
