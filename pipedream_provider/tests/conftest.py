"""
pipedream_provider test configuration.

Every test talks to an in-memory fake of the workflows API through
httpx.MockTransport. No network access is needed.
"""
from __future__ import annotations

import itertools
import json
import os
from collections import defaultdict, deque
from typing import Any

import httpx
import pytest

# ── Force test settings ────────────────────────────────────────────────────
# These must be set before any pipedream_provider modules are imported.

os.environ.setdefault("PIPEDREAM_ENVIRONMENT", "test")
os.environ.setdefault("PIPEDREAM_ERROR_BACKEND", "none")
os.environ.setdefault("PIPEDREAM_LOG_LEVEL", "WARNING")

BASE_URL = "http://api.test/v1/workflows"
os.environ.setdefault("PIPEDREAM_BASE_URL", BASE_URL)


# ── Fake API ───────────────────────────────────────────────────────────────

class FakeWorkflowsAPI:
    """
    Minimal stand-in for the /workflows collection.

    Stores records in ``records`` and every request in ``requests``.
    ``queue(method, response_or_exc)`` overrides the next response for a
    method; an exception instance is raised instead of answering.
    """

    prefix = "/v1/workflows"

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._canned: dict[str, deque] = defaultdict(deque)
        self._ids = itertools.count(1)

    def queue(self, method: str, response: httpx.Response | Exception) -> None:
        self._canned[method].append(response)

    def requests_for(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        canned = self._canned[request.method]
        if canned:
            item = canned.popleft()
            if isinstance(item, Exception):
                raise item
            return item

        workflow_id = request.url.path[len(self.prefix):].strip("/")

        if request.method == "POST" and not workflow_id:
            payload = json.loads(request.content)
            new_id = f"wf_{next(self._ids)}"
            self.records[new_id] = {"id": new_id, **payload}
            return httpx.Response(201, json={"id": new_id})

        if workflow_id not in self.records:
            return httpx.Response(404, json={"error": "workflow not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self.records[workflow_id])
        if request.method == "PUT":
            self.records[workflow_id].update(json.loads(request.content))
            return httpx.Response(200, json=self.records[workflow_id])
        if request.method == "DELETE":
            del self.records[workflow_id]
            return httpx.Response(204)
        return httpx.Response(405)


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_config_cache():
    """Each test sees the environment as it is when the test starts."""
    from pipedream_provider.core.config import _reset_config

    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def api() -> FakeWorkflowsAPI:
    return FakeWorkflowsAPI()


@pytest.fixture
def transport(api) -> httpx.MockTransport:
    return httpx.MockTransport(api)


@pytest.fixture
def client(transport):
    from pipedream_provider.client import WorkflowsClient

    with WorkflowsClient(BASE_URL, transport=transport) as c:
        yield c


@pytest.fixture
def provider(transport):
    from pipedream_provider.provider import Provider

    p = Provider()
    p.configure({"base_url": BASE_URL}, transport=transport)
    yield p
    p.close()


@pytest.fixture
def workflow_data():
    """Factory for ResourceData bound to the workflow schema."""
    from pipedream_provider.resources.data import ResourceData
    from pipedream_provider.resources.workflow import resource_workflow

    schema = resource_workflow().schema

    def _make(id: str = "", **attributes: Any) -> ResourceData:
        return ResourceData(schema, attributes, id=id)

    return _make


@pytest.fixture(autouse=True)
def reset_error_backend(monkeypatch):
    """Error capture stays off unless a test selects a backend."""
    from pipedream_provider.core import errors

    monkeypatch.setattr(errors, "_backend", "none")
    yield
