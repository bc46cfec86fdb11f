from __future__ import annotations

import json

from problems.samples import sample_graph
from solver.engine import EVENT_TYPE, ProblemSolver
from solver.log import DEFAULT_MAX_BYTES, EventLog
from solver.settings import resolve_settings


def test_append_writes_sorted_json_line(tmp_path) -> None:
    log = EventLog(tmp_path)
    assert log.current_path is None
    path = log.append({"type": "demo", "b": 2, "a": 1})

    assert path.parent.parent == tmp_path
    assert path.name == "search_00.jsonl"
    assert log.current_path == path

    payload = json.loads(path.read_text("utf-8").strip())
    assert list(payload) == sorted(payload)
    assert payload["a"] == 1
    assert "ts" in payload


def test_log_rotates_when_file_exceeds_limit(tmp_path) -> None:
    log = EventLog(tmp_path, max_bytes=64)
    first = log.append({"type": "demo", "padding": "x" * 80})
    second = log.append({"type": "demo"})

    assert first.name == "search_00.jsonl"
    assert second.name == "search_01.jsonl"


def test_new_log_resumes_newest_file_of_the_day(tmp_path) -> None:
    EventLog(tmp_path, max_bytes=100).append({"type": "demo", "padding": "x" * 120})
    EventLog(tmp_path, max_bytes=100).append({"type": "demo"})

    resumed = EventLog(tmp_path, max_bytes=100).append({"type": "demo"})
    assert resumed.name == "search_01.jsonl"
    assert len(resumed.read_text("utf-8").splitlines()) == 2


def test_from_settings_uses_resolved_directory_and_limit(tmp_path) -> None:
    settings = resolve_settings(env={"CLI_SEARCH_LOG_DIR": str(tmp_path / "events")})
    log = EventLog.from_settings(settings)

    assert log.base_dir == tmp_path / "events"
    assert log.max_bytes == settings.log_max_bytes
    assert EventLog(tmp_path).max_bytes == DEFAULT_MAX_BYTES


def test_solver_events_land_in_log(tmp_path) -> None:
    log = EventLog(tmp_path)
    ProblemSolver(event_sink=log.append).search(sample_graph())

    lines = log.current_path.read_text("utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["type"] == EVENT_TYPE
    assert event["status"] == "solved"
    assert event["stats"]["expanded"] == 6
