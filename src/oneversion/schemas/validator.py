"""Schema validation against the package-data registry."""

from typing import Any

from jsonschema.validators import Draft202012Validator

from oneversion.utils.schema_registry import get_registry


def validate_data(
    data: Any,
    schema_name: str,
    strict: bool = True
) -> tuple[bool, list[str]]:
    """Validate data against a schema from package data.

    Args:
        data: Data to validate
        schema_name: Name of schema to validate against
        strict: If True, raise on validation errors; if False, return error list

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        KeyError: If schema not found in package data
        ValueError: If validation fails and strict=True
    """
    schema = get_registry().get_json(schema_name)

    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])

    if errors:
        error_messages = [
            f"{'.'.join(str(p) for p in e.absolute_path)}: {e.message}"
            if e.absolute_path
            else e.message
            for e in errors
        ]

        if strict:
            raise ValueError(
                f"Schema validation failed for '{schema_name}':\n" +
                "\n".join(f"  - {msg}" for msg in error_messages)
            )

        return False, error_messages

    return True, []
