"""Abstract base for event adapters.

Event adapters turn raw status records from upstream feeds into the
canonical StatusEvent model.

Architectural rules:
    1. Adapters must NOT mutate the incoming record.
    2. adapt() must return a fully valid StatusEvent or raise ExtractionError.
    3. No adapter touches an accumulator or the store, only field mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from agent_worktime.domain.status import StatusEvent


class EventAdapter(ABC):
    """Base class for converting raw upstream records into StatusEvents."""

    @abstractmethod
    def can_handle(self, raw: Any) -> bool:
        """Return True if *raw* is a record this adapter can map.

        Called by the store before adapt(); anything that is not a
        mapping carrying the required fields must return False.
        """
        ...

    @abstractmethod
    def adapt(self, raw: Any) -> StatusEvent:
        """Translate a raw record into a validated StatusEvent.

        Raises:
            ExtractionError: If the record cannot be normalised.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of the record shape this adapter handles."""
        ...
