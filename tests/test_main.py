"""Tests for the JSON-lines replay entry point."""

import json

import pytest

from agent_worktime.main import main, replay
from agent_worktime.store.work_time_store import WorkTimeStore


def _line(status_id: int, name: str, ts: int, user: str = "7001") -> str:
    return json.dumps({
        "userId": user,
        "deviceId": "SIP/201",
        "statusId": status_id,
        "statusName": name,
        "statusTime": ts,
    })


@pytest.mark.asyncio
async def test_replay_counts_rejected_lines(tmp_path) -> None:
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join([
        _line(7, "Login", 0),
        "not json",
        _line(4, "Break", 1000),
        "",
        json.dumps({"userId": "7001"}),
        _line(1, "Available", 500),
    ]))

    store = WorkTimeStore()
    rejected = await replay(path, store)

    assert rejected == 3
    snap = await store.snapshot("7001")
    assert snap.timers["available"] == 1000


def test_main_prints_snapshots(tmp_path, capsys) -> None:
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join([
        _line(7, "Login", 0),
        _line(6, "Logout", 9000),
        _line(7, "Login", 0, user="7002"),
    ]))

    main([str(path)])

    out = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [o["owner_id"] for o in out] == ["7001", "7002"]
    assert out[0]["logged_in_duration"] == 9000


@pytest.mark.asyncio
async def test_replay_skips_non_object_lines(tmp_path) -> None:
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join([_line(7, "Login", 0), "[1, 2]", "42", _line(4, "Break", 600)]))

    store = WorkTimeStore()
    rejected = await replay(path, store)

    assert rejected == 2
    snap = await store.snapshot("7001")
    assert snap.timers["available"] == 600
