"""
pipedream_provider.runtime.validate
─────────────────────────────────────
Input validation via Pydantic v2. Raises the provider ValidationError
(not raw Pydantic errors) so host diagnostics are always consistent.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from pipedream_provider.core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.
    Raises pipedream_provider ValidationError (not Pydantic's) on failure.

    Usage:
        body = validate_input(WorkflowInput, {"name": "wf1", "description": ""})
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            user_message=f"Invalid {model.__name__}.",
            fields=fields,
        ) from exc


def require_id(resource_id: str, operation: str) -> str:
    """
    Return *resource_id* if it can address a single workflow.

    Empty ids and the dot segments "." and ".." raise ValidationError; the
    latter would be collapsed by URL normalization into the collection or
    its parent.
    """
    if not resource_id:
        raise ValidationError(
            user_message=f"Cannot {operation} a resource that has no remote id.",
            fields={"id": "must be set"},
            operation=operation,
        )
    if resource_id in (".", ".."):
        raise ValidationError(
            user_message=f"Remote id {resource_id!r} is not a valid path segment.",
            fields={"id": "must not be a dot segment"},
            operation=operation,
        )
    return resource_id
