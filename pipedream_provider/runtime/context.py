"""
pipedream_provider.runtime.context
────────────────────────────────────
Reconcile context: one per lifecycle operation the host dispatches.
Carries a request id that is sent as ``x-request-id`` on every outbound
call and bound into structlog contextvars for every log line.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog


@dataclass
class ReconcileContext:
    """Metadata for a single reconciliation step."""
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    resource_type: str | None = None
    operation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


_ctx: ContextVar[ReconcileContext | None] = ContextVar(
    "pipedream_reconcile_context",
    default=None,
)


def get_context() -> ReconcileContext | None:
    """Return the active reconcile context, if any."""
    return _ctx.get()


def get_request_id() -> str | None:
    ctx = _ctx.get()
    return ctx.request_id if ctx else None


@contextmanager
def reconcile_step(
    resource_type: str,
    operation: str,
    **metadata: Any,
) -> Iterator[ReconcileContext]:
    """
    Activate a fresh ReconcileContext for the duration of one operation.

    Usage:
        with reconcile_step("pipedream_workflow", "create") as ctx:
            resource.create(data, meta)
    """
    ctx = ReconcileContext(
        resource_type=resource_type,
        operation=operation,
        metadata=metadata,
    )
    token = _ctx.set(ctx)
    bound = structlog.contextvars.bind_contextvars(
        request_id=ctx.request_id,
        resource_type=resource_type,
        operation=operation,
    )
    try:
        yield ctx
    finally:
        structlog.contextvars.reset_contextvars(**bound)
        _ctx.reset(token)
