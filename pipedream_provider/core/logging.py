"""
pipedream_provider.core.logging
─────────────────────────────────
structlog setup for the provider. Output goes to stderr through the
``pipedream_provider`` stdlib logger only, so the host framework's own
stdout protocol and root logger stay untouched.

Loggers work before the provider is configured (INFO, JSON). Provider.configure()
then calls configure_logging() with ProviderConfig.log_level and log_format,
which replaces the handler and filter level in place.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_LOGGER_NAME = "pipedream_provider"

_SENSITIVE_KEYS = frozenset({
    "password", "secret", "token", "api_key", "apikey", "authorization",
    "access_token", "refresh_token", "client_secret", "private_key",
})

_handler: logging.Handler | None = None
_settings: tuple[str, str] | None = None


def _redact_sensitive(logger: Any, method: str, event_dict: dict) -> dict:
    """Mask values whose key names a credential."""
    for key in event_dict:
        if key.lower() in _SENSITIVE_KEYS:
            event_dict[key] = "[REDACTED]"
    return event_dict


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    (Re)configure structlog and the package handler.

    *fmt* is ``json`` or ``console``. Calling again with the same values is
    a no-op.
    """
    global _handler, _settings
    level = level.upper()
    fmt = fmt.lower()
    if _settings == (level, fmt):
        return

    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_sensitive,
    ]
    renderer = (
        structlog.dev.ConsoleRenderer() if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # reconfiguration must reach loggers created at import time
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    package_logger = logging.getLogger(_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    _handler = handler
    _settings = (level, fmt)


def current_settings() -> tuple[str, str] | None:
    """The (level, format) pair last applied, or None before first use."""
    return _settings


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    if _settings is None:
        configure_logging()
    return structlog.get_logger(name or _LOGGER_NAME)
