"""Test configuration and fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from workflow_definitions.workflow.loader import build_configuration
from workflow_definitions.workflow.resolver import WorkflowConfigResolver


@pytest.fixture
def raw_config() -> dict[str, object]:
    """A small configuration: default + reviewflow; A mapped, B and C not."""
    return {
        "default_workflow": "default",
        "collections": [
            {"id": "uuid-c", "handle": "123456789/C", "name": "C"},
            {"id": "uuid-a", "handle": "123456789/A", "name": "A"},
            {"id": "uuid-b", "handle": "123456789/B", "name": "B"},
        ],
        "mapping": {"123456789/A": "reviewflow"},
        "workflows": [
            {
                "id": "default",
                "first_step": "claim",
                "steps": [{"id": "claim", "role": "reviewer", "actions": ["claimaction"]}],
            },
            {
                "id": "reviewflow",
                "first_step": "review",
                "steps": [
                    {
                        "id": "review",
                        "role": "reviewer",
                        "actions": ["claimaction", "reviewaction"],
                        "next_step": "editorial",
                    },
                    {"id": "editorial", "role": "editor", "actions": ["editaction"]},
                ],
            },
        ],
    }


@pytest.fixture
def resolver(raw_config: dict[str, object]) -> WorkflowConfigResolver:
    """Provide a resolver over the small configuration."""
    return WorkflowConfigResolver(build_configuration(raw_config))


@pytest.fixture
def config_file(tmp_path: Path, raw_config: dict[str, object]) -> Path:
    """Write the small configuration to a temporary JSON file."""
    path = tmp_path / "config" / "workflow.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(raw_config), encoding="utf-8")
    return path
