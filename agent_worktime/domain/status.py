"""StatusEvent and Status — the inputs and the running values of the accumulator.

A StatusEvent is what the telephony platform reports: *this agent, on
this device, changed to this status at this moment*.  A Status is the
resolved (code, name, time) triple the state machine keeps as its
current, pending or pre-login value.  Both are immutable; moving a
Status forward in time produces a copy.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from agent_worktime.domain.enums import StatusCategory


# ── Status Event ─────────────────────────────────────────────────────────────

class StatusEvent(BaseModel):
    """One agent status change, externally produced and validated at the boundary."""

    owner_id: str = Field(..., min_length=1, description="Agent identifier")
    device_id: Optional[str] = Field(
        default=None,
        description="Telephony device the agent is working on, if known",
    )
    status_code: int = Field(..., ge=0, description="Raw platform status code")
    status_name: str = Field(..., min_length=1, description="Platform status label")
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")

    model_config = {"frozen": True}

    # ── Validators ───────────────────────────────────────────────────────

    @field_validator("owner_id", "device_id", mode="before")
    @classmethod
    def ids_as_strings(cls, v: Any) -> Any:
        # Extensions and device numbers often arrive as integers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("device_id", mode="before")
    @classmethod
    def blank_device_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("status_name", mode="before")
    @classmethod
    def status_name_lower(cls, v: Any) -> Any:
        # Normalised before the length check so a blank name is rejected
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def category(self) -> StatusCategory:
        return StatusCategory.resolve(self.status_code)


# ── Status ───────────────────────────────────────────────────────────────────

class Status(BaseModel):
    """A resolved status value held by the state machine."""

    code: StatusCategory
    name: str
    time: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @classmethod
    def from_event(cls, event: StatusEvent) -> Status:
        return cls(code=event.category, name=event.status_name, time=event.timestamp)

    @classmethod
    def available(cls, time: int) -> Status:
        """The implicit status an agent falls back to."""
        return cls(code=StatusCategory.AVAILABLE, name="available", time=time)

    def at(self, time: int) -> Status:
        """Copy of this status moved to *time*."""
        return self.model_copy(update={"time": time})
