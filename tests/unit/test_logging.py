from __future__ import annotations

import json
import logging

from workflow_definitions.logging import JsonFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="workflow_definitions.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Workflow definition is broken",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_lifts_workflow_and_reason() -> None:
    record = _record(workflow="broken", reason="no steps declared", path="/etc/workflow.json")

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "workflow_definitions.test"
    assert payload["message"] == "Workflow definition is broken"
    assert payload["workflow"] == "broken"
    assert payload["reason"] == "no steps declared"
    assert payload["extra"] == {"path": "/etc/workflow.json"}
    assert "exception" not in payload


def test_json_formatter_omits_extra_when_only_top_level_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(workflow="reviewflow")))

    assert payload["workflow"] == "reviewflow"
    assert "extra" not in payload
    assert "reason" not in payload
