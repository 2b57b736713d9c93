"""
pipedream_provider.resources.schema
─────────────────────────────────────
Declarative resource schema: typed attributes with required/optional flags
and defaults, plus the Resource binding of a schema to its four lifecycle
operations.

Schema.validate() is the generic required/optional/type enforcement the
host applies to desired configuration before Create and Update. Nothing
beyond that is checked here.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pipedream_provider.core.errors import ValidationError

if TYPE_CHECKING:
    from pipedream_provider.resources.data import ResourceData

LifecycleFn = Callable[["ResourceData", Any], None]


@dataclass(frozen=True)
class Attribute:
    """One schema attribute. Only string attributes are needed so far."""
    type: type = str
    required: bool = False
    default: Any = None
    description: str = ""

    def zero(self) -> Any:
        """Value reported for the attribute when nothing has been set."""
        return self.default if self.default is not None else self.type()


@dataclass
class Schema:
    attributes: dict[str, Attribute] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __iter__(self):
        return iter(self.attributes)

    def __getitem__(self, name: str) -> Attribute:
        return self.attributes[name]

    def validate(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """
        Check *config* against the schema and return it with defaults filled.

        Raises ValidationError listing every offending attribute: missing
        required ones, unknown names, and values of the wrong type.
        """
        errors: dict[str, str] = {}
        for name in config:
            if name not in self.attributes:
                errors[name] = "unsupported attribute"

        normalized: dict[str, Any] = {}
        for name, attr in self.attributes.items():
            value = config.get(name)
            if value is None:
                if attr.required:
                    errors[name] = "required attribute is missing"
                    continue
                normalized[name] = attr.zero()
            elif not isinstance(value, attr.type):
                errors[name] = f"expected {attr.type.__name__}, got {type(value).__name__}"
            else:
                normalized[name] = value

        if errors:
            raise ValidationError(
                user_message="Resource configuration is invalid.",
                fields=errors,
            )
        return normalized


@dataclass
class Resource:
    """A resource type: its schema and the four lifecycle operations."""
    schema: Schema
    create: LifecycleFn
    read: LifecycleFn
    update: LifecycleFn
    delete: LifecycleFn
    description: str = ""
