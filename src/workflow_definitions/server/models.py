"""Pydantic models for the REST server."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from workflow_definitions.server.paging import Page
from workflow_definitions.workflow.models import Collection, Step, WorkflowDefinition

T = TypeVar("T")


class ApiCollection(BaseModel):
    id: str
    handle: str
    name: str
    type: str = "collection"

    @classmethod
    def from_domain(cls, collection: Collection) -> ApiCollection:
        return cls(id=collection.id, handle=collection.handle, name=collection.name)


class ApiWorkflowStep(BaseModel):
    id: str
    role: str | None = None
    workflowactions: list[str] = Field(default_factory=list)
    nextStep: str | None = None
    options: dict[str, object] = Field(default_factory=dict)
    type: str = "workflowstep"

    @classmethod
    def from_domain(cls, step: Step) -> ApiWorkflowStep:
        return cls(
            id=step.id,
            role=step.role,
            workflowactions=list(step.actions),
            nextStep=step.next_step,
            options=dict(step.options),
        )


class ApiWorkflowDefinition(BaseModel):
    name: str
    isDefault: bool
    firstStep: str | None = None
    steps: list[str] = Field(default_factory=list)
    type: str = "workflowdefinition"

    @classmethod
    def from_domain(
        cls, definition: WorkflowDefinition, *, is_default: bool
    ) -> ApiWorkflowDefinition:
        return cls(
            name=definition.id,
            isDefault=is_default,
            firstStep=definition.first_step,
            steps=definition.step_ids(),
        )


class ApiPageMeta(BaseModel):
    size: int
    totalElements: int
    totalPages: int
    number: int


class ApiPage(BaseModel, Generic[T]):
    elements: list[T]
    page: ApiPageMeta

    @classmethod
    def from_page(cls, page: Page[T]) -> ApiPage[T]:
        return cls(
            elements=page.elements,
            page=ApiPageMeta(
                size=page.size,
                totalElements=page.total_elements,
                totalPages=page.total_pages,
                number=page.number,
            ),
        )


class ApiHealth(BaseModel):
    status: str
    workflows: int
    collections: int
