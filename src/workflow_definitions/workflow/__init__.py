"""Workflow configuration domain.

This package holds:
- immutable types for definitions, steps and collections
- the JSON configuration loader
- the resolver answering read-only lookups over a loaded configuration
"""

from workflow_definitions.workflow.errors import (
    UnknownCollection,
    UnknownStep,
    UnknownWorkflow,
    UnresolvableDefinition,
    WorkflowConfigurationError,
    WorkflowLookupError,
)
from workflow_definitions.workflow.loader import build_configuration, load_configuration
from workflow_definitions.workflow.models import (
    Collection,
    Step,
    WorkflowConfiguration,
    WorkflowDefinition,
)
from workflow_definitions.workflow.resolver import ResolverHolder, WorkflowConfigResolver

__all__ = [
    "Collection",
    "ResolverHolder",
    "Step",
    "UnknownCollection",
    "UnknownStep",
    "UnknownWorkflow",
    "UnresolvableDefinition",
    "WorkflowConfigResolver",
    "WorkflowConfiguration",
    "WorkflowConfigurationError",
    "WorkflowDefinition",
    "WorkflowLookupError",
    "build_configuration",
    "load_configuration",
]
