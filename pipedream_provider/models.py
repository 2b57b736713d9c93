"""
pipedream_provider.models
───────────────────────────
Wire models for the workflows API. Field types are strict: a number where
a string is expected is a malformed response, not something to coerce.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class WorkflowInput(BaseModel):
    """Request body for POST /workflows and PUT /workflows/{id}."""
    model_config = ConfigDict(extra="forbid")

    name: StrictStr
    description: StrictStr = ""


class CreatedWorkflow(BaseModel):
    """The part of the create response the provider relies on."""
    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(min_length=1)


class WorkflowRecord(BaseModel):
    """
    Remote workflow as returned by GET /workflows/{id}.

    A field the API leaves out (or sends as null) reads back as an empty
    string, which is what the host stores for an unset string attribute.
    """
    model_config = ConfigDict(extra="ignore")

    id: StrictStr | None = None
    name: StrictStr | None = None
    description: StrictStr | None = None

    @property
    def name_or_empty(self) -> str:
        return self.name or ""

    @property
    def description_or_empty(self) -> str:
        return self.description or ""
