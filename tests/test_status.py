"""Tests for StatusEvent, Status and the status enumerations."""

import pytest

from agent_worktime.domain.enums import StatusCategory, TimerBucket
from agent_worktime.domain.status import Status, StatusEvent

_CODES = {
    "available": 1,
    "meeting": 2,
    "do not disturb": 3,
    "break": 4,
    "out to lunch": 5,
    "logout": 6,
    "login": 7,
    "in call begin": 8,
    "in call end": 9,
}


def _event(name: str, ts: int, owner: str = "A7", device: str | None = "SIP/201", **overrides) -> StatusEvent:
    """Build a StatusEvent by platform status name."""
    base = {
        "owner_id": owner,
        "device_id": device,
        "status_code": _CODES.get(name, 42),
        "status_name": name,
        "timestamp": ts,
    }
    base.update(overrides)
    return StatusEvent.model_validate(base)


class TestStatusEvent:
    def test_valid_event_parses(self) -> None:
        event = _event("break", 1000)
        assert event.category is StatusCategory.BREAK
        assert event.timestamp == 1000

    def test_status_name_is_lowercased(self) -> None:
        event = _event("available", 0, status_name="  Available ")
        assert event.status_name == "available"

    def test_numeric_ids_coerced_to_strings(self) -> None:
        event = _event("login", 0, owner=7001, device=201)
        assert event.owner_id == "7001"
        assert event.device_id == "201"

    def test_numeric_string_code_accepted(self) -> None:
        event = _event("break", 0, status_code="4")
        assert event.category is StatusCategory.BREAK

    def test_unknown_code_resolves_to_unknown(self) -> None:
        assert _event("ringing", 0).category is StatusCategory.UNKNOWN

    def test_negative_timestamp_rejected(self) -> None:
        with pytest.raises(Exception):
            _event("break", -1)

    def test_empty_owner_rejected(self) -> None:
        with pytest.raises(Exception):
            _event("break", 0, owner="")

    def test_event_is_immutable(self) -> None:
        event = _event("break", 0)
        with pytest.raises(Exception):
            event.timestamp = 5


class TestStatus:
    def test_from_event(self) -> None:
        status = Status.from_event(_event("meeting", 300))
        assert status.code is StatusCategory.MEETING
        assert status.name == "meeting"
        assert status.time == 300

    def test_at_returns_moved_copy(self) -> None:
        status = Status.from_event(_event("break", 100))
        moved = status.at(900)
        assert moved.time == 900
        assert moved.code is StatusCategory.BREAK
        assert status.time == 100

    def test_available_default(self) -> None:
        status = Status.available(50)
        assert status.code is StatusCategory.AVAILABLE
        assert status.name == "available"


class TestEnums:
    def test_call_begin_accrues_in_call(self) -> None:
        assert TimerBucket.for_category(StatusCategory.CALL_BEGIN) is TimerBucket.IN_CALL

    @pytest.mark.parametrize(
        "category",
        [StatusCategory.LOGIN, StatusCategory.CALL_END, StatusCategory.UNKNOWN],
    )
    def test_meta_categories_have_no_bucket(self, category: StatusCategory) -> None:
        assert TimerBucket.for_category(category) is None

    def test_idle_categories(self) -> None:
        assert StatusCategory.DO_NOT_DISTURB.is_idle
        assert not StatusCategory.LOGOUT.is_idle
        assert not StatusCategory.CALL_BEGIN.is_idle

    def test_labels(self) -> None:
        assert StatusCategory.DO_NOT_DISTURB.label == "do not disturb"
        assert StatusCategory.CALL_BEGIN.label == "call begin"


class TestStatusEventNormalisation:
    def test_blank_status_name_rejected(self) -> None:
        with pytest.raises(Exception):
            _event("break", 0, status_name="   ")

    def test_device_zero_kept(self) -> None:
        assert _event("login", 0, device=0).device_id == "0"

    def test_blank_device_is_none(self) -> None:
        assert _event("login", 0, device="").device_id is None
