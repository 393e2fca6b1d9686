"""Pytest fixtures for oneversion tests."""
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from oneversion.manifest import MANIFEST_TEMPLATE


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Write the template manifest with top-level overrides, or raw YAML text."""

    def _write(name: str = "oneversion.yaml", *, text: str | None = None, **overrides) -> Path:
        path = tmp_path / name
        if text is None:
            data = dict(MANIFEST_TEMPLATE)
            data.update(overrides)
            text = yaml.safe_dump(data, sort_keys=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
