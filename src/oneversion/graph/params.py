"""Argument-file rendering for spawn actions."""

from __future__ import annotations

import shlex
from collections.abc import Iterable
from pathlib import Path

from oneversion.types import ParameterFileType, SpawnAction


def render_param_file(arguments: Iterable[str], file_type: ParameterFileType) -> str:
    """Render one argument per line, shell-quoted when requested."""
    if file_type is ParameterFileType.SHELL_QUOTED:
        lines = [shlex.quote(arg) for arg in arguments]
    else:
        lines = list(arguments)
    return "".join(f"{line}\n" for line in lines)


def write_param_file(action: SpawnAction, root: Path) -> Path:
    """Write the action's argument file under ``root`` and return its path."""
    path = root / action.param_file_exec_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_param_file(action.arguments, action.param_file.type), encoding="utf-8")
    return path
