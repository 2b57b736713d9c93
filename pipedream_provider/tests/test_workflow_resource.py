"""Tests for the pipedream_workflow resource lifecycle."""
from __future__ import annotations

import json

import httpx
import pytest

from pipedream_provider.core.errors import MalformedResponseError, TransportError, ValidationError
from pipedream_provider.resources.workflow import (
    WorkflowState,
    create_workflow,
    delete_workflow,
    read_workflow,
    resource_workflow,
    update_workflow,
)

from conftest import BASE_URL


# ── schema ─────────────────────────────────────────────────────────────────

class TestSchema:
    def test_attributes(self):
        schema = resource_workflow().schema
        assert list(schema) == ["name", "description"]
        assert schema["name"].required is True
        assert schema["description"].required is False

    def test_validate_fills_description_default(self):
        config = resource_workflow().schema.validate({"name": "wf1"})
        assert config == {"name": "wf1", "description": ""}

    def test_validate_requires_name(self):
        with pytest.raises(ValidationError) as exc_info:
            resource_workflow().schema.validate({"description": "x"})
        assert "name" in exc_info.value.fields

    def test_validate_rejects_unknown_and_mistyped(self):
        with pytest.raises(ValidationError) as exc_info:
            resource_workflow().schema.validate({"name": 3, "owner": "me"})
        assert set(exc_info.value.fields) == {"name", "owner"}

    def test_empty_name_is_not_rejected(self):
        assert resource_workflow().schema.validate({"name": ""})["name"] == ""

    def test_resource_data_rejects_unknown_attribute(self, workflow_data):
        with pytest.raises(ValidationError):
            workflow_data(owner="me")


# ── create ─────────────────────────────────────────────────────────────────

class TestCreate:
    def test_create_then_read_scenario(self, client, api, workflow_data):
        api.queue("POST", httpx.Response(201, json={"id": "abc123"}))
        api.queue("GET", httpx.Response(200, json={"name": "wf1", "description": "first"}))
        data = workflow_data(name="wf1", description="first")

        create_workflow(data, client)

        assert data.id == "abc123"
        assert data.get("name") == "wf1"
        assert data.get("description") == "first"
        assert [r.method for r in api.requests] == ["POST", "GET"]
        assert str(api.requests[1].url) == f"{BASE_URL}/abc123"

    def test_round_trip_against_echoing_server(self, client, api, workflow_data):
        data = workflow_data(name="wf2")
        create_workflow(data, client)
        assert data.to_dict() == {"id": "wf_1", "name": "wf2", "description": ""}
        assert api.records["wf_1"] == {"id": "wf_1", "name": "wf2", "description": ""}

    def test_server_values_win_on_read_back(self, client, api, workflow_data):
        api.queue("POST", httpx.Response(201, json={"id": "abc123"}))
        api.queue("GET", httpx.Response(200, json={"name": "WF1", "description": "normalized"}))
        data = workflow_data(name="wf1")
        create_workflow(data, client)
        assert data.get("name") == "WF1"
        assert data.get("description") == "normalized"

    def test_missing_id_leaves_resource_absent(self, client, api, workflow_data):
        api.queue("POST", httpx.Response(200, json={"status": "ok"}))
        data = workflow_data(name="wf1")
        with pytest.raises(MalformedResponseError):
            create_workflow(data, client)
        assert data.id == ""
        assert len(api.requests) == 1

    def test_transport_error_leaves_resource_absent(self, client, api, workflow_data):
        api.queue("POST", httpx.ConnectError("connection refused"))
        data = workflow_data(name="wf1")
        with pytest.raises(TransportError):
            create_workflow(data, client)
        assert data.id == ""

    def test_failed_read_back_keeps_id(self, client, api, workflow_data):
        api.queue("POST", httpx.Response(201, json={"id": "abc123"}))
        api.queue("GET", httpx.ReadTimeout("timed out"))
        data = workflow_data(name="wf1")
        with pytest.raises(TransportError):
            create_workflow(data, client)
        assert data.id == "abc123"


# ── read ───────────────────────────────────────────────────────────────────

class TestRead:
    def test_404_clears_id_scenario(self, client, workflow_data):
        data = workflow_data(id="missing-id", name="wf1", description="first")
        read_workflow(data, client)
        assert data.id == ""
        assert data.get("name") == "wf1"
        assert data.get("description") == "first"

    def test_without_id_is_a_no_op(self, client, api, workflow_data):
        data = workflow_data(name="wf1")
        read_workflow(data, client)
        assert data.id == ""
        assert api.requests == []

    def test_refreshes_attributes(self, client, api, workflow_data):
        api.records["abc123"] = {"id": "abc123", "name": "remote", "description": "changed"}
        data = workflow_data(id="abc123", name="local", description="")
        read_workflow(data, client)
        assert data.to_dict() == {"id": "abc123", "name": "remote", "description": "changed"}

    def test_only_404_is_special(self, client, api, workflow_data):
        api.queue("GET", httpx.Response(500, json={"error": "internal"}))
        data = workflow_data(id="abc123", name="wf1", description="first")
        read_workflow(data, client)
        assert data.id == "abc123"
        assert data.get("name") == ""
        assert data.get("description") == ""

    def test_mistyped_field_is_malformed(self, client, api, workflow_data):
        api.queue("GET", httpx.Response(200, json={"name": ["wf1"], "description": ""}))
        data = workflow_data(id="abc123", name="wf1")
        with pytest.raises(MalformedResponseError):
            read_workflow(data, client)
        assert data.get("name") == "wf1"

    def test_invalid_utf8_is_malformed(self, client, api, workflow_data):
        api.queue("GET", httpx.Response(200, content=b'{"name": "wf\xff1", "description": ""}'))
        data = workflow_data(id="abc123", name="wf1")
        with pytest.raises(MalformedResponseError):
            read_workflow(data, client)
        assert data.get("name") == "wf1"


# ── update ─────────────────────────────────────────────────────────────────

class TestUpdate:
    def test_update_scenario(self, client, api, workflow_data):
        api.records["abc123"] = {"id": "abc123", "name": "wf1", "description": "first"}
        data = workflow_data(id="abc123", name="wf1-renamed", description="first")

        update_workflow(data, client)

        put = api.requests_for("PUT")[0]
        assert str(put.url) == f"{BASE_URL}/abc123"
        assert json.loads(put.content) == {"name": "wf1-renamed", "description": "first"}
        assert [r.method for r in api.requests] == ["PUT", "GET"]
        assert data.to_dict() == {"id": "abc123", "name": "wf1-renamed", "description": "first"}

    def test_rejected_update_still_reads_back(self, client, api, workflow_data):
        api.records["abc123"] = {"id": "abc123", "name": "wf1", "description": "first"}
        api.queue("PUT", httpx.Response(500, json={"error": "nope"}))
        data = workflow_data(id="abc123", name="wf1-renamed", description="first")

        update_workflow(data, client)

        assert data.id == "abc123"
        assert data.get("name") == "wf1"

    def test_update_keeps_id(self, client, api, workflow_data):
        api.records["abc123"] = {"id": "other", "name": "wf1", "description": ""}
        data = workflow_data(id="abc123", name="wf1")
        update_workflow(data, client)
        assert data.id == "abc123"

    def test_update_without_id_is_rejected(self, client, api, workflow_data):
        data = workflow_data(name="wf1")
        with pytest.raises(ValidationError):
            update_workflow(data, client)
        assert api.requests == []


# ── delete ─────────────────────────────────────────────────────────────────

class TestDelete:
    @pytest.mark.parametrize("status", [204, 200, 404, 500])
    def test_delete_clears_id_whatever_the_status(self, client, api, workflow_data, status):
        api.queue("DELETE", httpx.Response(status))
        data = workflow_data(id="abc123", name="wf1")

        delete_workflow(data, client)

        assert data.id == ""
        [request] = api.requests
        assert request.method == "DELETE"
        assert str(request.url) == f"{BASE_URL}/abc123"

    def test_second_delete_is_a_local_no_op(self, client, api, workflow_data):
        api.records["abc123"] = {"id": "abc123", "name": "wf1", "description": ""}
        data = workflow_data(id="abc123", name="wf1")
        delete_workflow(data, client)
        delete_workflow(data, client)
        assert data.id == ""
        assert len(api.requests_for("DELETE")) == 1

    def test_transport_error_keeps_id(self, client, api, workflow_data):
        api.queue("DELETE", httpx.ConnectError("connection refused"))
        data = workflow_data(id="abc123", name="wf1")
        with pytest.raises(TransportError):
            delete_workflow(data, client)
        assert data.id == "abc123"

    @pytest.mark.parametrize("dot_id", [".", ".."])
    def test_dot_segment_id_is_rejected(self, client, api, workflow_data, dot_id):
        data = workflow_data(id=dot_id, name="wf1")
        with pytest.raises(ValidationError):
            delete_workflow(data, client)
        assert data.id == dot_id
        assert api.requests == []


# ── state ──────────────────────────────────────────────────────────────────

class TestWorkflowState:
    def test_from_data_uses_defaults(self, workflow_data):
        state = WorkflowState.from_data(workflow_data(name="wf1"))
        assert state == WorkflowState(name="wf1", description="", id="")

    def test_to_input(self):
        body = WorkflowState(name="wf1", description="first", id="abc").to_input()
        assert body.model_dump() == {"name": "wf1", "description": "first"}
