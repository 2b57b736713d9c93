"""
pipedream_provider.core.http
──────────────────────────────
HTTP constants shared by the workflows client: status codes and the
default headers sent with every request.
"""
from __future__ import annotations


class HTTP:
    """HTTP status codes the provider inspects or reports."""

    # 2xx
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # 4xx
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502


JSON_CONTENT_TYPE = "application/json"


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def default_headers(user_agent: str) -> dict[str, str]:
    return {
        "Accept": JSON_CONTENT_TYPE,
        "User-Agent": user_agent,
    }


__all__ = ["HTTP", "JSON_CONTENT_TYPE", "is_success", "default_headers"]
