"""FieldMappingAdapter — maps flat status records by configurable field names.

Default record shape (field names come from WorkTimeOptions):
{
    "userId": "7001",
    "deviceId": "SIP/201",
    "statusId": 4,
    "statusName": "Break",
    "statusTime": 1455962400000
}

The field names are resolved once when the adapter is built, so a feed
that calls the timestamp "eventTime" only needs different options.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from agent_worktime.adapters.base import EventAdapter
from agent_worktime.core.options import WorkTimeOptions
from agent_worktime.domain.errors import ExtractionError
from agent_worktime.domain.status import StatusEvent


class FieldMappingAdapter(EventAdapter):
    """Maps raw records to StatusEvents using configured field names."""

    def __init__(self, options: WorkTimeOptions | None = None) -> None:
        options = options or WorkTimeOptions()
        self._owner_field = options.owner_field_name
        self._device_field = options.device_id_field_name
        self._code_field = options.status_id_field_name
        self._name_field = options.status_name_field_name
        self._time_field = options.time_field_name
        self._required = (self._owner_field, self._code_field, self._name_field, self._time_field)

    @property
    def source_name(self) -> str:
        return "field_mapping"

    def can_handle(self, raw: Any) -> bool:
        if not isinstance(raw, Mapping):
            return False
        return all(raw.get(key) is not None for key in self._required)

    def adapt(self, raw: Any) -> StatusEvent:
        if not isinstance(raw, Mapping):
            raise ExtractionError(f"status record is not an object: {type(raw).__name__}")

        # ── Extract required fields ──────────────────────────────────────
        for key in self._required:
            if raw.get(key) is None:
                raise ExtractionError(f"status record missing '{key}'")

        try:
            return StatusEvent.model_validate({
                "owner_id": raw[self._owner_field],
                "device_id": raw.get(self._device_field),
                "status_code": raw[self._code_field],
                "status_name": raw[self._name_field],
                "timestamp": raw[self._time_field],
            })
        except ValidationError as exc:
            raise ExtractionError(f"invalid status record: {exc.error_count()} error(s)") from exc
