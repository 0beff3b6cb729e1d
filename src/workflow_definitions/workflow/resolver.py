"""Read-only queries over a loaded workflow configuration.

The resolver never mutates its configuration, so one instance can serve any
number of concurrent requests. Reloading means building a new resolver and
swapping it in through :class:`ResolverHolder`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from workflow_definitions.workflow.errors import (
    UnknownCollection,
    UnknownStep,
    UnknownWorkflow,
    UnresolvableDefinition,
)
from workflow_definitions.workflow.models import (
    Collection,
    Step,
    WorkflowConfiguration,
    WorkflowDefinition,
)

logger = logging.getLogger(__name__)


class WorkflowConfigResolver:
    def __init__(self, config: WorkflowConfiguration) -> None:
        self._config = config
        self._known = config.known_names

    @property
    def config(self) -> WorkflowConfiguration:
        return self._config

    @property
    def default_workflow_name(self) -> str:
        return self._config.default_workflow

    def exists_by_name(self, name: str) -> bool:
        return name in self._known

    def is_default(self, name: str) -> bool:
        if not self.exists_by_name(name):
            raise UnknownWorkflow(name)
        return name == self._config.default_workflow

    def _effective_workflow(self, handle: str) -> str:
        return self._config.mapping.get(handle, self._config.default_workflow)

    def list_collections_for_workflow(self, name: str) -> list[Collection]:
        """Collections whose effective workflow is `name`, ordered by handle.

        For the default workflow that is every collection without an explicit
        mapping to some other workflow. For any other workflow it is exactly
        the collections explicitly mapped to it.
        """

        if self.is_default(name):
            handles = [h for h in self._config.collections if self._effective_workflow(h) == name]
        else:
            handles = [
                h
                for h, mapped in self._config.mapping.items()
                if mapped == name and h in self._config.collections
            ]
        return [self._config.collections[h] for h in sorted(handles)]

    def get_workflow(self, name: str) -> WorkflowDefinition:
        if not self.exists_by_name(name):
            raise UnknownWorkflow(name)
        definition = self._config.definitions.get(name)
        if definition is None:
            reason = self._config.unresolvable.get(name, "no definition configured")
            raise UnresolvableDefinition(name, reason)
        return definition

    def list_steps_for_workflow(self, name: str) -> list[Step]:
        """Steps of `name` in configured execution order."""

        return list(self.get_workflow(name).steps)

    def list_workflows(self) -> list[WorkflowDefinition]:
        return list(self._config.definitions.values())

    def find_collection(self, collection_id: str) -> Collection:
        """Look a collection up by UUID or by handle."""

        found = self._config.collections.get(collection_id)
        if found is not None:
            return found
        for col in self._config.collections.values():
            if col.id == collection_id:
                return col
        raise UnknownCollection(collection_id)

    def workflow_for_collection(self, collection_id: str) -> WorkflowDefinition:
        collection = self.find_collection(collection_id)
        return self.get_workflow(self._effective_workflow(collection.handle))

    def find_step(self, step_id: str) -> Step:
        """Look a step up by id across all resolvable definitions.

        The loader rejects step ids shared between workflows, so at most one
        step matches.
        """

        for definition in self._config.definitions.values():
            for step in definition.steps:
                if step.id == step_id:
                    return step
        raise UnknownStep(step_id)


class ResolverHolder:
    """Publishes the current resolver and swaps it atomically on reload.

    Readers call :meth:`get` once per request and keep using that instance, so
    they never see a half-built configuration.
    """

    def __init__(self, loader: Callable[[], WorkflowConfiguration]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._resolver = WorkflowConfigResolver(loader())

    def get(self) -> WorkflowConfigResolver:
        return self._resolver

    def reload(self) -> WorkflowConfigResolver:
        """Load a fresh configuration and publish it.

        If loading fails the error propagates and the previous resolver stays.
        """

        with self._lock:
            resolver = WorkflowConfigResolver(self._loader())
            self._resolver = resolver
        logger.info(
            "Workflow configuration reloaded",
            extra={"workflows": len(resolver.config.definitions)},
        )
        return resolver
