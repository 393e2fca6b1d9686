"""Unit tests for argument-file rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oneversion.graph.params import render_param_file, write_param_file
from oneversion.types import Artifact, Label, ParameterFileType, SpawnAction

if TYPE_CHECKING:
    from pathlib import Path


def test_shell_quoted_rendering_quotes_only_unsafe_arguments() -> None:
    rendered = render_param_file(
        ["--inputs", "a.jar,@ext//pkg:a", "dir with space/b.jar,//pkg:b", ""],
        ParameterFileType.SHELL_QUOTED,
    )
    assert rendered == "--inputs\na.jar,@ext//pkg:a\n'dir with space/b.jar,//pkg:b'\n''\n"


def test_unquoted_rendering_is_raw() -> None:
    rendered = render_param_file(["a b", "c"], ParameterFileType.UNQUOTED)
    assert rendered == "a b\nc\n"


def test_write_param_file_uses_derived_path(tmp_path: Path) -> None:
    action = SpawnAction(
        outputs=(Artifact.of("bazel-out/bin/app/check.txt"),),
        inputs=(),
        executable=Artifact.of("tools/oneversion"),
        arguments=("--output", "bazel-out/bin/app/check.txt"),
        owner=Label.parse("//app:bin"),
    )

    path = write_param_file(action, tmp_path)

    assert path == tmp_path / "bazel-out/bin/app/check.txt-2.params"
    assert path.read_text(encoding="utf-8") == "--output\nbazel-out/bin/app/check.txt\n"
