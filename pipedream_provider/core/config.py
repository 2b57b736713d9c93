"""
pipedream_provider.core.config
────────────────────────────────
Typed provider configuration with env layering. Reads from .env, then
environment variables. All fields are typed via Pydantic.

Env vars are prefixed with PIPEDREAM_.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.pipedream.com/v1/workflows"


class ProviderConfig(BaseSettings):
    """
    Typed provider configuration. The base URL is handed to the workflows
    client at construction time, so tests can point it at a fake endpoint.
    """

    model_config = SettingsConfigDict(
        env_prefix="PIPEDREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Remote API ────────────────────────────────────────────────────────────
    base_url: str = DEFAULT_BASE_URL
    http_timeout: float | None = None
    user_agent: str = "pipedream-provider/0.1.0"

    # ── Application ───────────────────────────────────────────────────────────
    environment: str = "development"

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "json"

    # ── Error reporting ───────────────────────────────────────────────────────
    error_backend: str = "none"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("http_timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("http_timeout must be positive")
        return v

    @field_validator("environment")
    @classmethod
    def validate_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if v.lower() not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("error_backend")
    @classmethod
    def validate_error_backend(cls, v: str) -> str:
        if v.lower() not in {"none", "sentry"}:
            raise ValueError(f"error_backend must be 'none' or 'sentry', got {v!r}")
        return v.lower()

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache(maxsize=1)
def get_config() -> ProviderConfig:
    """
    Return the singleton provider config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return ProviderConfig()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()
