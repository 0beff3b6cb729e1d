"""Unit tests for workflow lookups over a loaded configuration."""

from __future__ import annotations

import copy

import pytest

from workflow_definitions.workflow.errors import (
    UnknownCollection,
    UnknownStep,
    UnknownWorkflow,
    UnresolvableDefinition,
)
from workflow_definitions.workflow.loader import build_configuration
from workflow_definitions.workflow.resolver import WorkflowConfigResolver


def _handles(collections) -> list[str]:
    return [c.handle for c in collections]


def test_exists_by_name_is_case_sensitive(resolver: WorkflowConfigResolver) -> None:
    assert resolver.exists_by_name("reviewflow")
    assert resolver.exists_by_name("default")
    assert not resolver.exists_by_name("ReviewFlow")
    assert not resolver.exists_by_name("nonexistent")


def test_is_default(resolver: WorkflowConfigResolver) -> None:
    assert resolver.is_default("default") is True
    assert resolver.is_default("reviewflow") is False
    with pytest.raises(UnknownWorkflow):
        resolver.is_default("nonexistent")


def test_named_workflow_returns_explicit_mappings_only(resolver: WorkflowConfigResolver) -> None:
    assert _handles(resolver.list_collections_for_workflow("reviewflow")) == ["123456789/A"]


def test_default_workflow_returns_unmapped_collections_sorted(
    resolver: WorkflowConfigResolver,
) -> None:
    assert _handles(resolver.list_collections_for_workflow("default")) == [
        "123456789/B",
        "123456789/C",
    ]


def test_unknown_workflow_fails_both_queries(resolver: WorkflowConfigResolver) -> None:
    with pytest.raises(UnknownWorkflow) as excinfo:
        resolver.list_collections_for_workflow("nonexistent")
    assert str(excinfo.value) == "No workflow with name nonexistent is configured"

    with pytest.raises(UnknownWorkflow):
        resolver.list_steps_for_workflow("nonexistent")


def test_steps_keep_configured_order(resolver: WorkflowConfigResolver) -> None:
    first = [s.id for s in resolver.list_steps_for_workflow("reviewflow")]
    second = [s.id for s in resolver.list_steps_for_workflow("reviewflow")]

    assert first == ["review", "editorial"]
    assert first == second


def test_steps_are_not_resorted(raw_config: dict[str, object]) -> None:
    raw = copy.deepcopy(raw_config)
    raw["workflows"][1]["steps"].reverse()  # type: ignore[index]
    raw["workflows"][1]["first_step"] = "editorial"  # type: ignore[index]
    resolver = WorkflowConfigResolver(build_configuration(raw))

    assert [s.id for s in resolver.list_steps_for_workflow("reviewflow")] == [
        "editorial",
        "review",
    ]


def test_each_collection_belongs_to_exactly_one_workflow(raw_config: dict[str, object]) -> None:
    raw = copy.deepcopy(raw_config)
    raw["collections"].append({"id": "uuid-d", "handle": "123456789/D"})  # type: ignore[union-attr]
    raw["collections"].append({"id": "uuid-e", "handle": "123456789/E"})  # type: ignore[union-attr]
    raw["mapping"]["123456789/D"] = "reviewflow"  # type: ignore[index]
    # Explicit mapping to the default workflow's name.
    raw["mapping"]["123456789/E"] = "default"  # type: ignore[index]
    resolver = WorkflowConfigResolver(build_configuration(raw))

    seen: list[str] = []
    for definition in resolver.list_workflows():
        seen.extend(_handles(resolver.list_collections_for_workflow(definition.id)))

    assert sorted(seen) == sorted(resolver.config.collections)
    assert len(seen) == len(set(seen))
    assert "123456789/E" in _handles(resolver.list_collections_for_workflow("default"))


def test_mapping_to_unknown_collection_is_ignored(raw_config: dict[str, object]) -> None:
    raw = copy.deepcopy(raw_config)
    raw["mapping"]["999/missing"] = "reviewflow"  # type: ignore[index]
    resolver = WorkflowConfigResolver(build_configuration(raw))

    assert _handles(resolver.list_collections_for_workflow("reviewflow")) == ["123456789/A"]


def test_mapped_but_undefined_workflow_is_known_but_unresolvable(
    raw_config: dict[str, object],
) -> None:
    raw = copy.deepcopy(raw_config)
    raw["mapping"]["123456789/B"] = "ghostflow"  # type: ignore[index]
    resolver = WorkflowConfigResolver(build_configuration(raw))

    assert resolver.exists_by_name("ghostflow")
    assert _handles(resolver.list_collections_for_workflow("ghostflow")) == ["123456789/B"]
    with pytest.raises(UnresolvableDefinition) as excinfo:
        resolver.list_steps_for_workflow("ghostflow")
    assert excinfo.value.reason == "no definition configured"


def test_empty_step_list_is_success(raw_config: dict[str, object]) -> None:
    raw = copy.deepcopy(raw_config)
    raw["workflows"].append({"id": "emptyflow", "steps": []})  # type: ignore[union-attr]
    resolver = WorkflowConfigResolver(build_configuration(raw))

    assert resolver.list_steps_for_workflow("emptyflow") == []
    assert resolver.list_collections_for_workflow("emptyflow") == []


def test_workflow_for_collection(resolver: WorkflowConfigResolver) -> None:
    assert resolver.workflow_for_collection("uuid-a").id == "reviewflow"
    assert resolver.workflow_for_collection("123456789/A").id == "reviewflow"
    assert resolver.workflow_for_collection("uuid-b").id == "default"
    with pytest.raises(UnknownCollection):
        resolver.workflow_for_collection("uuid-z")


def test_find_step(resolver: WorkflowConfigResolver) -> None:
    step = resolver.find_step("editorial")
    assert step.role == "editor"
    assert step.actions == ("editaction",)
    with pytest.raises(UnknownStep):
        resolver.find_step("publish")


def test_list_workflows_keeps_configured_order(resolver: WorkflowConfigResolver) -> None:
    assert [d.id for d in resolver.list_workflows()] == ["default", "reviewflow"]
    assert resolver.default_workflow_name == "default"
