"""
pipedream_provider.resources.data
───────────────────────────────────
ResourceData: the mutable per-resource handle a host framework passes into
every lifecycle operation. Attributes are read and written by name against
the resource schema; the remote id lives in its own slot, where the empty
string means the resource is absent remotely.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pipedream_provider.core.errors import ValidationError
from pipedream_provider.resources.schema import Schema


class ResourceData:
    def __init__(
        self,
        schema: Schema,
        attributes: Mapping[str, Any] | None = None,
        id: str = "",
    ) -> None:
        self._schema = schema
        self._attributes: dict[str, Any] = {}
        self._id = id or ""
        for name, value in (attributes or {}).items():
            self.set(name, value)

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str | None) -> None:
        self._id = value or ""

    @property
    def is_absent(self) -> bool:
        return not self._id

    def get(self, name: str) -> Any:
        """Return the attribute value, or its schema zero value when unset."""
        self._check(name)
        if name in self._attributes:
            return self._attributes[name]
        return self._schema[name].zero()

    def set(self, name: str, value: Any) -> None:
        self._check(name)
        if value is None:
            self._attributes.pop(name, None)
            return
        self._attributes[name] = value

    def raw_attributes(self) -> dict[str, Any]:
        """Attribute values exactly as set, with None for attributes never set."""
        return {name: self._attributes.get(name) for name in self._schema}

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of id plus every schema attribute, as the host would persist it."""
        return {"id": self._id, **{name: self.get(name) for name in self._schema}}

    def _check(self, name: str) -> None:
        if name not in self._schema:
            raise ValidationError(
                user_message=f"Unknown attribute {name!r}.",
                fields={name: "unsupported attribute"},
            )

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, attributes={self._attributes!r})"
