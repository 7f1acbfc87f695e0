"""Tests for raw record extraction."""

from __future__ import annotations

import pytest

from agent_worktime.adapters.field_mapping import FieldMappingAdapter
from agent_worktime.core.options import WorkTimeOptions
from agent_worktime.domain.enums import StatusCategory
from agent_worktime.domain.errors import ExtractionError
from agent_worktime.domain.status import StatusEvent


def _record(**overrides) -> dict:
    base = {
        "userId": "7001",
        "deviceId": "SIP/201",
        "statusId": 4,
        "statusName": "Break",
        "statusTime": 1455962400000,
    }
    base.update(overrides)
    return base


class TestFieldMappingAdapter:
    def test_default_mapping(self) -> None:
        event = FieldMappingAdapter().adapt(_record())
        assert isinstance(event, StatusEvent)
        assert event.owner_id == "7001"
        assert event.device_id == "SIP/201"
        assert event.category is StatusCategory.BREAK
        assert event.status_name == "break"
        assert event.timestamp == 1455962400000

    def test_custom_mapping(self) -> None:
        adapter = FieldMappingAdapter(WorkTimeOptions(time_field_name="eventTime", owner_field_name="agent"))
        raw = {"agent": 7001, "statusId": "1", "statusName": "available", "eventTime": 5}
        event = adapter.adapt(raw)
        assert event.owner_id == "7001"
        assert event.timestamp == 5
        assert event.device_id is None

    def test_can_handle(self) -> None:
        adapter = FieldMappingAdapter()
        assert adapter.can_handle(_record())
        assert not adapter.can_handle({"userId": "7001"})

    def test_input_not_mutated(self) -> None:
        raw = _record()
        snapshot = dict(raw)
        FieldMappingAdapter().adapt(raw)
        assert raw == snapshot

    @pytest.mark.parametrize("missing", ["userId", "statusId", "statusName", "statusTime"])
    def test_missing_field_rejected(self, missing: str) -> None:
        raw = _record()
        del raw[missing]
        with pytest.raises(ExtractionError, match=missing):
            FieldMappingAdapter().adapt(raw)

    def test_invalid_value_rejected(self) -> None:
        with pytest.raises(ExtractionError):
            FieldMappingAdapter().adapt(_record(statusTime="yesterday"))

    def test_extraction_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            FieldMappingAdapter().adapt({})

    def test_source_name(self) -> None:
        assert FieldMappingAdapter().source_name == "field_mapping"


class TestNonObjectRecords:
    @pytest.mark.parametrize("raw", [[1, 2], 42, "login", None])
    def test_adapt_rejects_non_mapping(self, raw) -> None:
        with pytest.raises(ExtractionError, match="not an object"):
            FieldMappingAdapter().adapt(raw)

    @pytest.mark.parametrize("raw", [[1, 2], 42, None])
    def test_can_handle_rejects_non_mapping(self, raw) -> None:
        assert not FieldMappingAdapter().can_handle(raw)

    def test_can_handle_rejects_null_field(self) -> None:
        assert not FieldMappingAdapter().can_handle(_record(statusTime=None))

    def test_device_zero_survives_mapping(self) -> None:
        event = FieldMappingAdapter().adapt(_record(deviceId=0))
        assert event.device_id == "0"
