"""
pipedream_provider._registry
──────────────────────────────
Resource registry: the single source of truth for which resource types the
provider serves.

Adding a new resource type:
  1. Implement it under ``pipedream_provider/resources/``
  2. Add ``__provider_export__ = {"resources": {<type name>: <factory name>}}``
  3. Add the module name to RESOURCE_MODULES below

After step 3 the type is part of ``collect_resources()`` and therefore of
``Provider.resources_map``.
"""
from __future__ import annotations

import importlib
from typing import Any

from pipedream_provider.resources.schema import Resource

RESOURCE_MODULES: list[str] = [
    "workflow",
]


def collect_resources() -> dict[str, Resource]:
    """
    Build the resource type map from every module in ``RESOURCE_MODULES``.

    Each module's ``__provider_export__["resources"]`` maps a type name to
    the name of a zero-argument factory returning a Resource.

    Raises:
        ValueError: a type name is exported by more than one module, or a
        declared factory does not exist.
    """
    resources: dict[str, Resource] = {}

    for module_name in RESOURCE_MODULES:
        qualified = f"pipedream_provider.resources.{module_name}"
        mod = importlib.import_module(qualified)

        export_meta: dict[str, Any] | None = getattr(mod, "__provider_export__", None)
        if not export_meta or "resources" not in export_meta:
            continue

        for type_name, factory_name in export_meta["resources"].items():
            if type_name in resources:
                raise ValueError(f"Resource type {type_name!r} registered twice ({qualified})")
            factory = getattr(mod, factory_name, None)
            if factory is None:
                raise ValueError(f"{qualified} exports missing factory {factory_name!r}")
            resources[type_name] = factory()

    return resources
