from __future__ import annotations

from dataclasses import dataclass


class WorkflowConfigurationError(ValueError):
    """The workflow configuration file could not be loaded or is inconsistent."""


class WorkflowLookupError(LookupError):
    """Base class for name lookups that found nothing usable."""


@dataclass(frozen=True, slots=True)
class UnknownWorkflow(WorkflowLookupError):
    name: str

    def __str__(self) -> str:
        return f"No workflow with name {self.name} is configured"


@dataclass(frozen=True, slots=True)
class UnresolvableDefinition(WorkflowLookupError):
    """The name is referenced by the configuration but its definition is unusable.

    This points at a deployment defect rather than bad user input.
    """

    name: str
    reason: str

    def __str__(self) -> str:
        return f"Workflow {self.name!r} is configured but cannot be resolved: {self.reason}"


@dataclass(frozen=True, slots=True)
class UnknownCollection(WorkflowLookupError):
    collection_id: str

    def __str__(self) -> str:
        return f"No collection with id or handle {self.collection_id} is known"


@dataclass(frozen=True, slots=True)
class UnknownStep(WorkflowLookupError):
    step_id: str

    def __str__(self) -> str:
        return f"No workflow step with id {self.step_id} is configured"
