"""
pipedream_provider.core.errors
────────────────────────────────
Error taxonomy for provider operations. Every lifecycle failure the host
framework sees is a ProviderError subclass with a stable code, a message
that is safe to show in plan/apply output, and internal detail.

A 404 on read is not an error: it marks the resource absent.

Errors are reported to the backend chosen by set_error_backend():
none (default) or sentry.
"""
from __future__ import annotations

from importlib.util import find_spec
from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class ProviderError(Exception):
    """
    Base class for all provider errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface in host framework diagnostics
    - detail: internal context (URLs, status codes, upstream messages)
    - status_code: HTTP status of the remote response, when there was one
    """

    code: str = "provider_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "The provider operation failed.",
        detail: str | None = None,
        status_code: int | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.status_code = status_code
        self.metadata = metadata
        super().__init__(self.detail)
        _capture(self)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }
        if self.status_code is not None:
            d["error"]["status_code"] = self.status_code
        return d


# ── Typed error classes ───────────────────────────────────────────────────────

class TransportError(ProviderError):
    """Request could not be sent or its response could not be read."""
    code = "transport_error"


class SerializationError(ProviderError):
    """Request body could not be encoded as JSON."""
    code = "serialization_error"


class MalformedResponseError(ProviderError):
    """Response body is not JSON, or an expected field is absent or mistyped."""
    code = "malformed_response"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "The API returned a malformed response.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class ValidationError(ProviderError):
    """Resource attributes or operation inputs failed validation."""
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class UnknownResourceError(ProviderError):
    """No resource type is registered under the requested name."""
    code = "unknown_resource"


class ConfigurationError(ProviderError):
    """Misconfiguration detected while configuring the provider."""
    code = "configuration_error"


# ── Error capture backend ─────────────────────────────────────────────────────

_ERROR_BACKENDS = frozenset({"none", "sentry"})
_backend = "none"


def set_error_backend(backend: str) -> None:
    """
    Select where ProviderErrors are reported. Provider.configure() calls this
    with ProviderConfig.error_backend; "sentry" needs the ``sentry`` extra.
    """
    backend = backend.lower()
    if backend not in _ERROR_BACKENDS:
        raise ConfigurationError(
            user_message=f"Unknown error backend {backend!r}.",
            allowed=sorted(_ERROR_BACKENDS),
        )
    if backend == "sentry" and find_spec("sentry_sdk") is None:
        raise ConfigurationError(
            user_message="Error backend 'sentry' requires sentry-sdk.",
            detail="sentry-sdk is not installed. Install it with: pip install 'pipedream-provider[sentry]'",
        )
    global _backend
    _backend = backend


def get_error_backend() -> str:
    return _backend


def _capture(error: ProviderError) -> None:
    """Send error to the selected backend. Called automatically by ProviderError.__init__."""
    if _backend == "sentry":
        _capture_sentry(error)


def _capture_sentry(error: ProviderError) -> None:
    import sentry_sdk

    if isinstance(error, (TransportError, MalformedResponseError)):
        sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_message(
            str(error),
            level="warning",
            extras={"code": error.code, **error.metadata},
        )


def configure_sentry(dsn: str, **kwargs: Any) -> None:
    """Initialize Sentry and route ProviderErrors to it."""
    set_error_backend("sentry")
    import sentry_sdk
    sentry_sdk.init(dsn=dsn, **kwargs)
