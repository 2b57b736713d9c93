"""
pipedream_provider
────────────────────
Declarative-infrastructure provider for Pipedream workflows. Stable
top-level exports; import from here, not from sub-modules directly.
"""
from pipedream_provider.core.logging import get_logger
from pipedream_provider.core.errors import (
    ProviderError,
    TransportError,
    SerializationError,
    MalformedResponseError,
    ValidationError,
    UnknownResourceError,
    ConfigurationError,
)
from pipedream_provider.core.config import get_config, ProviderConfig

from pipedream_provider.models import WorkflowInput, WorkflowRecord, CreatedWorkflow
from pipedream_provider.client import WorkflowsClient

from pipedream_provider.resources.schema import Attribute, Schema, Resource
from pipedream_provider.resources.data import ResourceData
from pipedream_provider.resources.workflow import WorkflowState, resource_workflow

from pipedream_provider.provider import Provider

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "ProviderError", "TransportError", "SerializationError",
    "MalformedResponseError", "ValidationError", "UnknownResourceError",
    "ConfigurationError",
    # config
    "get_config", "ProviderConfig",
    # wire models
    "WorkflowInput", "WorkflowRecord", "CreatedWorkflow",
    # client
    "WorkflowsClient",
    # schema
    "Attribute", "Schema", "Resource", "ResourceData",
    # resources
    "WorkflowState", "resource_workflow",
    # provider
    "Provider",
]
