"""
pipedream_provider.resources.workflow
───────────────────────────────────────
The ``pipedream_workflow`` resource: schema plus create/read/update/delete
mapped onto the workflows API.

Each operation moves the host's ResourceData into a typed WorkflowState,
makes its HTTP call(s), and writes the result back. Identity lifecycle:

  - create sets the id from the API response, then reads back
  - read clears the id on 404
  - update never touches the id, then reads back
  - delete clears the id whatever the API answers
"""
from __future__ import annotations

from dataclasses import dataclass

from pipedream_provider.client import WorkflowsClient
from pipedream_provider.core.logging import get_logger
from pipedream_provider.models import WorkflowInput, WorkflowRecord
from pipedream_provider.resources.data import ResourceData
from pipedream_provider.resources.schema import Attribute, Resource, Schema
from pipedream_provider.runtime.validate import require_id, validate_input

log = get_logger(__name__)

RESOURCE_TYPE = "pipedream_workflow"


@dataclass
class WorkflowState:
    """Typed view of one workflow's local state."""
    name: str = ""
    description: str = ""
    id: str = ""

    @classmethod
    def from_data(cls, data: ResourceData) -> "WorkflowState":
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            id=data.id,
        )

    @classmethod
    def from_record(cls, workflow_id: str, record: WorkflowRecord) -> "WorkflowState":
        # The id we addressed is kept even if the body echoes a different one.
        return cls(
            name=record.name_or_empty,
            description=record.description_or_empty,
            id=workflow_id,
        )

    def to_input(self) -> WorkflowInput:
        return validate_input(
            WorkflowInput,
            {"name": self.name, "description": self.description},
        )

    def apply_to(self, data: ResourceData) -> None:
        data.set_id(self.id)
        data.set("name", self.name)
        data.set("description", self.description)


# ── Lifecycle operations ──────────────────────────────────────────────────────

def create_workflow(data: ResourceData, client: WorkflowsClient) -> None:
    state = WorkflowState.from_data(data)
    if state.id:
        log.warning("workflow.create.existing_id", workflow_id=state.id)

    created = client.create(state.to_input())
    data.set_id(created.id)
    log.info("workflow.created", workflow_id=created.id, name=state.name)

    # No rollback if this fails: the id stays set and the next read recovers.
    read_workflow(data, client)


def read_workflow(data: ResourceData, client: WorkflowsClient) -> None:
    workflow_id = data.id
    if not workflow_id:
        log.debug("workflow.read.skipped", reason="no id")
        return

    record = client.get(workflow_id)
    if record is None:
        log.warning("workflow.read.not_found", workflow_id=workflow_id)
        data.set_id("")
        return

    WorkflowState.from_record(workflow_id, record).apply_to(data)
    log.debug("workflow.read", workflow_id=workflow_id)


def update_workflow(data: ResourceData, client: WorkflowsClient) -> None:
    state = WorkflowState.from_data(data)
    workflow_id = require_id(state.id, "update")

    status = client.update(workflow_id, state.to_input())
    log.info("workflow.updated", workflow_id=workflow_id, status=status)

    # The PUT status is not checked; the read-back shows what the API kept.
    read_workflow(data, client)


def delete_workflow(data: ResourceData, client: WorkflowsClient) -> None:
    workflow_id = data.id
    if not workflow_id:
        log.debug("workflow.delete.skipped", reason="no id")
        return

    status = client.delete(workflow_id)
    data.set_id("")
    log.info("workflow.deleted", workflow_id=workflow_id, status=status)


# ── Resource definition ───────────────────────────────────────────────────────

def resource_workflow() -> Resource:
    return Resource(
        schema=Schema({
            "name": Attribute(str, required=True, description="Workflow name."),
            "description": Attribute(str, default="", description="Free-form description."),
        }),
        create=create_workflow,
        read=read_workflow,
        update=update_workflow,
        delete=delete_workflow,
        description="A Pipedream workflow.",
    )


__provider_export__ = {
    "resources": {RESOURCE_TYPE: "resource_workflow"},
    "description": "Workflows managed through the /workflows endpoint",
}
