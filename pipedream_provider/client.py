"""
pipedream_provider.client
───────────────────────────
Synchronous HTTP client for the workflows API. One blocking round trip per
call, no retries. Transport failures are mapped to TransportError, bodies
are encoded and decoded through runtime.serialize, and every request carries
the active reconcile context's request id.

Status handling: ``get`` treats 404 as "absent"; ``update`` and ``delete``
return the status code without checking it.

Backed by: httpx (sync client).
"""
from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from pipedream_provider.core.config import DEFAULT_BASE_URL, ProviderConfig
from pipedream_provider.core.errors import TransportError
from pipedream_provider.core.http import HTTP, JSON_CONTENT_TYPE, default_headers, is_success
from pipedream_provider.core.logging import get_logger
from pipedream_provider.models import CreatedWorkflow, WorkflowInput, WorkflowRecord
from pipedream_provider.runtime.context import get_request_id
from pipedream_provider.runtime.serialize import deserialize, serialize
from pipedream_provider.runtime.validate import require_id

log = get_logger(__name__)


class WorkflowsClient:
    """
    Client for the ``/workflows`` collection.

    Usage::

        with WorkflowsClient(base_url="https://api.pipedream.com/v1/workflows") as client:
            created = client.create(WorkflowInput(name="wf1"))
            record = client.get(created.id)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float | None = None,
        user_agent: str = "pipedream-provider/0.1.0",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        client_kwargs: dict[str, Any] = {
            "headers": default_headers(user_agent),
            "transport": transport,
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = httpx.Client(**client_kwargs)

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "WorkflowsClient":
        return cls(
            config.base_url,
            timeout=config.http_timeout,
            user_agent=config.user_agent,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # ── Operations ────────────────────────────────────────────────────────────

    def create(self, body: WorkflowInput) -> CreatedWorkflow:
        """POST the workflow and return the decoded create response."""
        response = self._request("POST", self._base_url, content=serialize(body))
        return deserialize(response.content, CreatedWorkflow, status_code=response.status_code)

    def get(self, workflow_id: str) -> WorkflowRecord | None:
        """Fetch a workflow. Returns None when the API answers 404."""
        response = self._request("GET", self._url(workflow_id))
        if response.status_code == HTTP.NOT_FOUND:
            return None
        return deserialize(response.content, WorkflowRecord, status_code=response.status_code)

    def update(self, workflow_id: str, body: WorkflowInput) -> int:
        """PUT the workflow. The status code is returned, never raised on."""
        response = self._request("PUT", self._url(workflow_id), content=serialize(body))
        return response.status_code

    def delete(self, workflow_id: str) -> int:
        """DELETE the workflow. The status code is returned, never raised on."""
        response = self._request("DELETE", self._url(workflow_id))
        return response.status_code

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "WorkflowsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _url(self, workflow_id: str) -> str:
        require_id(workflow_id, "address")
        return f"{self._base_url}/{quote(workflow_id, safe='')}"

    def _build_headers(self, has_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {}
        if has_body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        request_id = get_request_id()
        if request_id:
            headers["x-request-id"] = request_id
        return headers

    def _request(self, method: str, url: str, *, content: bytes | None = None) -> httpx.Response:
        headers = self._build_headers(content is not None)
        log.debug("http.request", method=method, url=url)
        try:
            response = self._client.request(method, url, content=content, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.error("http.transport_error", method=method, url=url, error=str(exc))
            raise TransportError(
                user_message=f"{method} request to the workflows API failed.",
                detail=f"{method} {url} failed: {exc}",
                method=method,
                url=url,
            ) from exc

        if is_success(response.status_code):
            log.debug("http.response", method=method, url=url, status=response.status_code)
        else:
            log.info("http.response", method=method, url=url, status=response.status_code)
        return response


__all__ = ["WorkflowsClient"]
