"""Load a workflow configuration from a JSON file.

The file is validated in two passes:

1. Shape, with pydantic models (`WorkflowConfigFile`). Any failure here is
   fatal and raised as :class:`WorkflowConfigurationError`.
2. Integrity of each workflow definition (entry step exists, step links point
   at real steps, no duplicate step ids). A broken definition does not stop the
   load: its name is recorded as unresolvable so lookups can report it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from workflow_definitions.workflow.errors import WorkflowConfigurationError
from workflow_definitions.workflow.models import (
    Collection,
    Step,
    WorkflowConfiguration,
    WorkflowDefinition,
)

logger = logging.getLogger(__name__)


class StepModel(BaseModel):
    id: str = Field(min_length=1)
    role: str | None = None
    actions: list[str] = Field(default_factory=list)
    next_step: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)


class WorkflowModel(BaseModel):
    id: str = Field(min_length=1)
    first_step: str | None = None
    # None means the definition was declared without steps at all, which is
    # different from an explicitly empty list.
    steps: list[StepModel] | None = None


class CollectionModel(BaseModel):
    id: str = Field(min_length=1)
    handle: str = Field(min_length=1)
    name: str = ""


class WorkflowConfigFile(BaseModel):
    default_workflow: str = Field(min_length=1)
    collections: list[CollectionModel] = Field(default_factory=list)
    mapping: dict[str, str] = Field(default_factory=dict)
    workflows: list[WorkflowModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self) -> WorkflowConfigFile:
        seen: set[str] = set()
        for wf in self.workflows:
            if wf.id in seen:
                raise ValueError(f"Duplicate workflow id: {wf.id}")
            seen.add(wf.id)

        # Step ids are looked up globally, so they may not be shared between workflows.
        step_owner: dict[str, str] = {}
        for wf in self.workflows:
            for step_id in sorted({s.id for s in wf.steps or []}):
                owner = step_owner.setdefault(step_id, wf.id)
                if owner != wf.id:
                    raise ValueError(
                        f"Step id {step_id} is used by both workflow {owner} and {wf.id}"
                    )

        handles: set[str] = set()
        uuids: set[str] = set()
        for col in self.collections:
            if col.handle in handles:
                raise ValueError(f"Duplicate collection handle: {col.handle}")
            if col.id in uuids:
                raise ValueError(f"Duplicate collection id: {col.id}")
            handles.add(col.handle)
            uuids.add(col.id)
        return self


def _check_definition(wf: WorkflowModel) -> str | None:
    """Return why `wf` cannot be resolved, or None when it is usable."""

    if wf.steps is None:
        return "no steps declared"

    ids = [s.id for s in wf.steps]
    dupes = sorted({i for i in ids if ids.count(i) > 1})
    if dupes:
        return f"duplicate step ids: {', '.join(dupes)}"

    known = set(ids)
    if wf.steps and wf.first_step is None:
        return "first_step is missing"
    if wf.first_step is not None and wf.first_step not in known:
        return f"first_step {wf.first_step!r} is not one of its steps"
    for s in wf.steps:
        if s.next_step is not None and s.next_step not in known:
            return f"step {s.id!r} points at unknown next_step {s.next_step!r}"
    return None


def _to_definition(wf: WorkflowModel) -> WorkflowDefinition:
    steps = tuple(
        Step(
            id=s.id,
            role=s.role,
            actions=tuple(s.actions),
            next_step=s.next_step,
            options=MappingProxyType(dict(s.options)),
        )
        for s in wf.steps or []
    )
    return WorkflowDefinition(id=wf.id, first_step=wf.first_step, steps=steps)


def build_configuration(raw: object) -> WorkflowConfiguration:
    """Validate parsed JSON and build an immutable :class:`WorkflowConfiguration`."""

    try:
        parsed = WorkflowConfigFile.model_validate(raw)
    except ValidationError as e:
        raise WorkflowConfigurationError(f"Invalid workflow configuration: {e}") from e

    definitions: dict[str, WorkflowDefinition] = {}
    unresolvable: dict[str, str] = {}
    for wf in parsed.workflows:
        reason = _check_definition(wf)
        if reason is None:
            definitions[wf.id] = _to_definition(wf)
        else:
            unresolvable[wf.id] = reason
            logger.warning(
                "Workflow definition is broken", extra={"workflow": wf.id, "reason": reason}
            )

    referenced = {parsed.default_workflow, *parsed.mapping.values()}
    for name in sorted(referenced):
        if name not in definitions and name not in unresolvable:
            unresolvable[name] = "no definition configured"
            logger.warning(
                "Workflow is referenced but has no definition", extra={"workflow": name}
            )

    collections = {
        c.handle: Collection(id=c.id, handle=c.handle, name=c.name) for c in parsed.collections
    }
    for handle, name in sorted(parsed.mapping.items()):
        if handle not in collections:
            logger.warning(
                "Mapping refers to an unknown collection; ignoring it",
                extra={"handle": handle, "workflow": name},
            )

    config = WorkflowConfiguration(
        default_workflow=parsed.default_workflow,
        collections=MappingProxyType(collections),
        mapping=MappingProxyType(dict(parsed.mapping)),
        definitions=MappingProxyType(definitions),
        unresolvable=MappingProxyType(unresolvable),
    )
    logger.info(
        "Workflow configuration loaded",
        extra={
            "default_workflow": config.default_workflow,
            "workflows": len(definitions),
            "unresolvable": len(unresolvable),
            "collections": len(collections),
            "mappings": len(parsed.mapping),
        },
    )
    return config


def load_configuration(path: Path) -> WorkflowConfiguration:
    """Read `path` and build a configuration from it."""

    if not path.exists():
        raise WorkflowConfigurationError(f"Workflow configuration file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WorkflowConfigurationError(
            f"Workflow configuration cannot be read: {path}: {e}"
        ) from e
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise WorkflowConfigurationError(
            f"Workflow configuration is not valid JSON: {path}: {e}"
        ) from e

    logger.debug("Parsing workflow configuration", extra={"path": str(path)})
    return build_configuration(raw)
