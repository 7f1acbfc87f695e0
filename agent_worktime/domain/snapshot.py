"""Immutable read models produced by the accumulator and the store.

These are pure data structures.  Counters and timers are plain copies;
nothing here references live accumulator state.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from agent_worktime.domain.errors import FailureKind


class CurrentStatusView(BaseModel):
    """Category and name of the status currently accruing time."""

    code: int
    name: str

    model_config = {"frozen": True}


class WorkTimeSnapshot(BaseModel):
    """Accumulated work-time metrics of one agent at a point in time."""

    owner_id: Optional[str]
    current_device_id: Optional[str]
    current_status: Optional[CurrentStatusView]
    is_logged_in: bool
    is_on_call: bool
    is_available: bool
    event_counters: dict[str, int] = Field(..., description="Raw event occurrences per category")
    status_counters: dict[str, int] = Field(..., description="Effective status transitions per category")
    timers: dict[str, int] = Field(..., description="Accumulated milliseconds per bucket")
    logged_in_duration: int = Field(..., description="Sum of every timer except logout")
    devices: list[str] = Field(default_factory=list, description="Devices seen while logged in")
    first_status_time: int
    first_status_time_h: str
    last_status_time: Optional[int] = None
    last_status_time_h: Optional[str] = None
    last_login_time: Optional[int] = None
    last_login_time_h: Optional[str] = None

    model_config = {"frozen": True}


class IngestOutcome(BaseModel):
    """Result of offering one event to an accumulator."""

    accepted: bool
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def ok(cls) -> IngestOutcome:
        return cls(accepted=True)

    @classmethod
    def rejected(cls, failure: FailureKind, detail: str) -> IngestOutcome:
        return cls(accepted=False, failure=failure, detail=detail)
