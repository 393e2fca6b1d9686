"""Schema registry with package-data-only loading.

Schemas ship inside the ``oneversion_schemas`` package so validation does not
depend on the current working directory.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib.resources import files
from typing import Any

SCHEMA_PACKAGE = "oneversion_schemas"
SCHEMA_SUFFIX = ".schema.json"


@dataclass(frozen=True)
class SchemaRegistry:
    """Registry of available schemas from package data.

    Attributes:
        available: Sorted tuple of canonical schema names (without .schema.json suffix)
    """

    available: tuple[str, ...] = ()

    def __init__(self) -> None:
        object.__setattr__(self, "available", tuple(sorted(self._discover_schemas())))

    def _discover_schemas(self) -> list[str]:
        try:
            schema_files = files(SCHEMA_PACKAGE)
            return [
                item.name[: -len(SCHEMA_SUFFIX)]
                for item in schema_files.iterdir()
                if item.name.endswith(SCHEMA_SUFFIX)
            ]
        except (ModuleNotFoundError, FileNotFoundError):
            return []

    def _normalize_name(self, name: str) -> str:
        if name.endswith(SCHEMA_SUFFIX):
            return name[: -len(SCHEMA_SUFFIX)]
        return name

    def get_text(self, name: str) -> str:
        """Load schema as text from package data.

        Raises:
            KeyError: If schema not found (includes available schemas in message)
        """
        canonical_name = self._normalize_name(name)
        if canonical_name not in self.available:
            available_list = ", ".join(self.available) or "(none)"
            raise KeyError(
                f"Schema '{canonical_name}' not found in oneversion package data.\n"
                f"Available schemas: {available_list}"
            )
        schema_file = files(SCHEMA_PACKAGE) / f"{canonical_name}{SCHEMA_SUFFIX}"
        return schema_file.read_text(encoding="utf-8")

    def get_json(self, name: str) -> dict[str, Any]:
        """Load schema as parsed JSON dictionary.

        Raises:
            KeyError: If schema not found
            ValueError: If schema JSON is malformed
        """
        canonical_name = self._normalize_name(name)
        text = self.get_text(canonical_name)
        try:
            res: dict[str, Any] = json.loads(text)
            return res
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Schema '{canonical_name}' contains invalid JSON: {e}\n"
                f"This may indicate a corrupted installation. Try reinstalling oneversion."
            ) from e


_registry: SchemaRegistry | None = None


def get_registry() -> SchemaRegistry:
    """Get global schema registry instance (singleton)."""
    global _registry
    if _registry is None:
        _registry = SchemaRegistry()
    return _registry


def get_schema_json(schema_name: str) -> dict[str, Any]:
    """Load schema as parsed dictionary (convenience function)."""
    return get_registry().get_json(schema_name)
