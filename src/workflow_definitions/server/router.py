"""Workflow configuration REST API.

All routes are read-only and mounted under `/api`. Each handler translates the
request into one resolver call and pages the result; lookup failures become
404 responses.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from workflow_definitions.config import ServerSettings
from workflow_definitions.server.models import (
    ApiCollection,
    ApiHealth,
    ApiPage,
    ApiWorkflowDefinition,
    ApiWorkflowStep,
)
from workflow_definitions.server.paging import PageRequest, get_page
from workflow_definitions.workflow.errors import (
    UnknownCollection,
    UnknownStep,
    UnknownWorkflow,
    UnresolvableDefinition,
)
from workflow_definitions.workflow.resolver import ResolverHolder, WorkflowConfigResolver

logger = logging.getLogger(__name__)

router = APIRouter()

DEFINITIONS_PATH = "/config/workflowdefinitions"
STEPS_PATH = "/config/workflowsteps"


def _settings(request: Request) -> ServerSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, ServerSettings):
        # This should never happen for the real app, but keeps the API fail-fast.
        raise HTTPException(status_code=500, detail="Server settings not configured")
    return settings


def _resolver(request: Request) -> WorkflowConfigResolver:
    holder = getattr(request.app.state, "resolver_holder", None)
    if not isinstance(holder, ResolverHolder):
        raise HTTPException(status_code=500, detail="Workflow configuration not loaded")
    return holder.get()


def _page_request(request: Request, page: int, size: int | None) -> PageRequest:
    settings = _settings(request)
    if size is None:
        size = settings.default_page_size
    # Oversized requests are capped rather than rejected.
    return PageRequest(page=page, size=min(size, settings.max_page_size))


def _not_found(name: str, e: UnknownWorkflow | UnresolvableDefinition) -> HTTPException:
    if isinstance(e, UnresolvableDefinition):
        logger.error(
            "Workflow definition cannot be resolved",
            extra={"workflow": name, "reason": e.reason},
        )
    else:
        logger.info("Unknown workflow requested", extra={"workflow": name})
    return HTTPException(status_code=404, detail=f"No workflow with name {name} is configured")


def _definition_out(resolver: WorkflowConfigResolver, name: str) -> ApiWorkflowDefinition:
    definition = resolver.get_workflow(name)
    return ApiWorkflowDefinition.from_domain(
        definition, is_default=resolver.is_default(definition.id)
    )


@router.get("/health", response_model=ApiHealth)
def health(request: Request) -> ApiHealth:
    resolver = _resolver(request)
    return ApiHealth(
        status="ok",
        workflows=len(resolver.config.definitions),
        collections=len(resolver.config.collections),
    )


@router.get(DEFINITIONS_PATH, response_model=ApiPage[ApiWorkflowDefinition])
def list_workflow_definitions(
    request: Request,
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
) -> ApiPage[ApiWorkflowDefinition]:
    resolver = _resolver(request)
    items = [
        ApiWorkflowDefinition.from_domain(d, is_default=resolver.is_default(d.id))
        for d in resolver.list_workflows()
    ]
    return ApiPage[ApiWorkflowDefinition].from_page(
        get_page(items, _page_request(request, page, size))
    )


@router.get(
    f"{DEFINITIONS_PATH}/search/findByCollection", response_model=ApiWorkflowDefinition
)
def find_by_collection(
    request: Request, uuid: str = Query(min_length=1)
) -> ApiWorkflowDefinition:
    resolver = _resolver(request)
    try:
        definition = resolver.workflow_for_collection(uuid)
    except UnknownCollection as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (UnknownWorkflow, UnresolvableDefinition) as e:
        raise _not_found(e.name, e) from e
    return ApiWorkflowDefinition.from_domain(
        definition, is_default=resolver.is_default(definition.id)
    )


@router.get(f"{DEFINITIONS_PATH}/{{workflow_name}}", response_model=ApiWorkflowDefinition)
def get_workflow_definition(request: Request, workflow_name: str) -> ApiWorkflowDefinition:
    try:
        return _definition_out(_resolver(request), workflow_name)
    except (UnknownWorkflow, UnresolvableDefinition) as e:
        raise _not_found(workflow_name, e) from e


@router.get(
    f"{DEFINITIONS_PATH}/{{workflow_name}}/collections",
    response_model=ApiPage[ApiCollection],
)
def get_collections(
    request: Request,
    workflow_name: str,
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
) -> ApiPage[ApiCollection]:
    """Collections that use the workflow.

    For the default workflow these are the collections without an explicit
    mapping to another workflow.
    """

    try:
        collections = _resolver(request).list_collections_for_workflow(workflow_name)
    except UnknownWorkflow as e:
        raise _not_found(workflow_name, e) from e
    items = [ApiCollection.from_domain(c) for c in collections]
    return ApiPage[ApiCollection].from_page(get_page(items, _page_request(request, page, size)))


@router.get(
    f"{DEFINITIONS_PATH}/{{workflow_name}}/steps",
    response_model=ApiPage[ApiWorkflowStep],
)
def get_steps(
    request: Request,
    workflow_name: str,
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
) -> ApiPage[ApiWorkflowStep]:
    """Steps of the workflow in execution order."""

    try:
        steps = _resolver(request).list_steps_for_workflow(workflow_name)
    except (UnknownWorkflow, UnresolvableDefinition) as e:
        raise _not_found(workflow_name, e) from e
    items = [ApiWorkflowStep.from_domain(s) for s in steps]
    return ApiPage[ApiWorkflowStep].from_page(get_page(items, _page_request(request, page, size)))


@router.get(f"{STEPS_PATH}/{{step_id}}", response_model=ApiWorkflowStep)
def get_step(request: Request, step_id: str) -> ApiWorkflowStep:
    try:
        step = _resolver(request).find_step(step_id)
    except UnknownStep as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return ApiWorkflowStep.from_domain(step)
