"""
pipedream_provider.runtime.serialize
──────────────────────────────────────
JSON encoding of request bodies and decoding of response bodies into
Pydantic models. Encoding failures raise SerializationError; bodies that
are not JSON or do not match the expected model raise
MalformedResponseError.
"""
from __future__ import annotations

from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from pipedream_provider.core.errors import MalformedResponseError, SerializationError

T = TypeVar("T", bound=BaseModel)


def serialize(obj: BaseModel) -> bytes:
    """
    Serialize a Pydantic model to JSON bytes.

    Usage:
        body = serialize(WorkflowInput(name="wf1"))  # b'{"name":"wf1","description":""}'
    """
    try:
        return obj.model_dump_json().encode()
    except PydanticSerializationError as exc:
        raise SerializationError(
            user_message="Request body could not be encoded as JSON.",
            detail=f"Could not serialize {type(obj).__name__}: {exc}",
        ) from exc


def deserialize(
    data: bytes | str,
    model: Type[T],
    *,
    status_code: int | None = None,
) -> T:
    """
    Deserialize a JSON response body into a Pydantic model.

    Usage:
        record = deserialize(response.content, WorkflowRecord, status_code=200)
    """
    # Bytes go to pydantic as-is so invalid UTF-8 is rejected, not replaced.
    try:
        return model.model_validate_json(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]) or "body": err["msg"]
            for err in exc.errors()
        }
        raise MalformedResponseError(
            user_message=f"The API returned a malformed {model.__name__}.",
            detail=f"Could not decode {model.__name__} from response body {_preview(data)!r}",
            fields=fields,
            status_code=status_code,
        ) from exc


def _preview(data: bytes | str, limit: int = 200) -> str:
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return data if len(data) <= limit else data[:limit] + "..."
