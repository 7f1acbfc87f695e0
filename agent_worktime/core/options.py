"""Per-accumulator options: field mapping and validation policy."""

from __future__ import annotations

from dataclasses import dataclass

from agent_worktime.config import Settings


@dataclass(frozen=True)
class WorkTimeOptions:
    """Immutable options shared by an accumulator, its validator and its adapter.

    ``throws`` selects strict validation (violations abort the event) or
    lenient validation (checks are skipped).  ``check_device_id`` toggles
    the device-consistency check independently.
    """

    owner_field_name: str = "userId"
    time_field_name: str = "statusTime"
    status_name_field_name: str = "statusName"
    status_id_field_name: str = "statusId"
    device_id_field_name: str = "deviceId"
    throws: bool = True
    check_device_id: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> WorkTimeOptions:
        return cls(
            owner_field_name=settings.owner_field_name,
            time_field_name=settings.time_field_name,
            status_name_field_name=settings.status_name_field_name,
            status_id_field_name=settings.status_id_field_name,
            device_id_field_name=settings.device_id_field_name,
            throws=settings.throws,
            check_device_id=settings.check_device_id,
        )
