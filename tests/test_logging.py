from __future__ import annotations

import io
import json

import pytest

from confnotices.logging import StructuredLog, log_event


def test_json_event_has_core_fields() -> None:
    stream = io.StringIO()
    log_event("info", "runner", "pass_complete", pass_id="p1", json_output=True, stream=stream, notices=2)
    event = json.loads(stream.getvalue())
    assert event["level"] == "info"
    assert event["pass_id"] == "p1"
    assert event["component"] == "runner"
    assert event["action"] == "pass_complete"
    assert event["notices"] == 2
    assert event["ts"]


def test_text_event_is_key_value() -> None:
    stream = io.StringIO()
    log_event("warn", "runner", "check_contract", stream=stream, check_id="a/b")
    line = stream.getvalue().strip()
    assert "level=warn" in line
    assert "action=check_contract" in line
    assert line.endswith("check_id=a/b")


def test_structured_log_filters_by_level_and_binds_pass() -> None:
    stream = io.StringIO()
    log = StructuredLog(json_output=True, min_level="WARN", stream=stream).bind("p2")
    log.event("debug", "runner", "check_done")
    log.event("error", "runner", "check_failed")
    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [e["action"] for e in events] == ["check_failed"]
    assert events[0]["pass_id"] == "p2"


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        StructuredLog(min_level="loud")
