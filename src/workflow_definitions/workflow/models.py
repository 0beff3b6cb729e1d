"""Immutable domain types for a loaded workflow configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Collection:
    """A grouping of submitted items. Exactly one workflow applies to it."""

    id: str
    handle: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class Step:
    """One stage of a workflow definition.

    `options` is carried through untouched; its meaning belongs to whatever
    executes the workflow.
    """

    id: str
    role: str | None = None
    actions: tuple[str, ...] = ()
    next_step: str | None = None
    options: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class WorkflowDefinition:
    id: str
    first_step: str | None
    steps: tuple[Step, ...]

    def step_ids(self) -> list[str]:
        return [s.id for s in self.steps]


@dataclass(frozen=True, slots=True)
class WorkflowConfiguration:
    """A load-once snapshot of everything the resolver reads.

    - `collections`: every collection known to the system, keyed by handle
    - `mapping`: explicit collection handle -> workflow name
    - `definitions`: resolvable definitions, in configured order
    - `unresolvable`: names that are referenced but have no usable definition,
      with the reason the loader gave up on them
    """

    default_workflow: str
    collections: Mapping[str, Collection]
    mapping: Mapping[str, str]
    definitions: Mapping[str, WorkflowDefinition]
    unresolvable: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def known_names(self) -> frozenset[str]:
        names = {self.default_workflow}
        names.update(self.mapping.values())
        names.update(self.definitions)
        names.update(self.unresolvable)
        return frozenset(names)
