"""
pipedream_provider.provider
─────────────────────────────
Host-facing entry point. A Provider owns the resource type map and the
configured WorkflowsClient (the "meta" every lifecycle operation receives),
and dispatches one lifecycle operation per reconciliation step.

Usage::

    provider = Provider()
    provider.configure()
    data = provider.new_resource_data("pipedream_workflow", {"name": "wf1"})
    provider.create("pipedream_workflow", data)
    data.id  # remote id assigned by the API
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from pipedream_provider._registry import collect_resources
from pipedream_provider.client import WorkflowsClient
from pipedream_provider.core.config import ProviderConfig, get_config
from pipedream_provider.core.errors import (
    ConfigurationError,
    ProviderError,
    UnknownResourceError,
    set_error_backend,
)
from pipedream_provider.core.logging import configure_logging, get_logger
from pipedream_provider.resources.data import ResourceData
from pipedream_provider.resources.schema import Resource
from pipedream_provider.runtime.context import reconcile_step

log = get_logger(__name__)


class Provider:
    def __init__(self, resources_map: dict[str, Resource] | None = None) -> None:
        self.resources_map: dict[str, Resource] = (
            resources_map if resources_map is not None else collect_resources()
        )
        self._meta: WorkflowsClient | None = None

    # ── Configuration ─────────────────────────────────────────────────────────

    def configure(
        self,
        config: ProviderConfig | Mapping[str, Any] | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> WorkflowsClient:
        """
        Apply logging and error-reporting settings, then build the
        WorkflowsClient handed to every lifecycle operation.

        *config* may be a ProviderConfig, a mapping of overrides applied on
        top of the environment, or None for the cached environment config.
        """
        if isinstance(config, ProviderConfig):
            cfg = config
        else:
            try:
                cfg = ProviderConfig(**dict(config)) if config is not None else get_config()
            except PydanticValidationError as exc:
                raise ConfigurationError(
                    user_message="Provider configuration is invalid.",
                    detail=str(exc),
                ) from exc

        configure_logging(cfg.log_level, cfg.log_format)
        set_error_backend(cfg.error_backend)

        if self._meta is not None:
            self._meta.close()
        self._meta = WorkflowsClient.from_config(cfg, transport=transport)
        log.info("provider.configured", base_url=cfg.base_url, environment=cfg.environment)
        return self._meta

    @property
    def meta(self) -> WorkflowsClient:
        if self._meta is None:
            raise ConfigurationError(
                user_message="Provider is not configured.",
                detail="Provider.configure() must be called before any lifecycle operation.",
            )
        return self._meta

    def close(self) -> None:
        if self._meta is not None:
            self._meta.close()
            self._meta = None

    # ── Resource lookup ───────────────────────────────────────────────────────

    def resource(self, type_name: str) -> Resource:
        try:
            return self.resources_map[type_name]
        except KeyError:
            raise UnknownResourceError(
                user_message=f"Unsupported resource type {type_name!r}.",
                known=sorted(self.resources_map),
            ) from None

    def new_resource_data(
        self,
        type_name: str,
        attributes: Mapping[str, Any] | None = None,
        id: str = "",
    ) -> ResourceData:
        return ResourceData(self.resource(type_name).schema, attributes, id=id)

    # ── Lifecycle dispatch ────────────────────────────────────────────────────

    def create(self, type_name: str, data: ResourceData) -> None:
        resource = self.resource(type_name)
        resource.schema.validate(data.raw_attributes())
        self._dispatch(type_name, "create", resource.create, data)

    def read(self, type_name: str, data: ResourceData) -> None:
        self._dispatch(type_name, "read", self.resource(type_name).read, data)

    def update(self, type_name: str, data: ResourceData) -> None:
        resource = self.resource(type_name)
        resource.schema.validate(data.raw_attributes())
        self._dispatch(type_name, "update", resource.update, data)

    def delete(self, type_name: str, data: ResourceData) -> None:
        self._dispatch(type_name, "delete", self.resource(type_name).delete, data)

    def _dispatch(self, type_name: str, operation: str, fn: Any, data: ResourceData) -> None:
        meta = self.meta
        with reconcile_step(type_name, operation, resource_id=data.id):
            try:
                fn(data, meta)
            except ProviderError as exc:
                log.error(
                    "provider.operation_failed",
                    code=exc.code,
                    error=exc.detail,
                    status_code=exc.status_code,
                )
                raise

