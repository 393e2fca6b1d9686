"""Value types shared by the one-version action encoder and builder."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from oneversion.errors import LabelSyntaxError

MNEMONIC = "JavaOneVersion"
PROGRESS_MESSAGE = "Checking for one-version violations in %s"
PARAM_FILE_SUFFIX = "-2.params"

_REPO_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_.~+-]*$")
_TARGET_NAME_RE = re.compile(r"^[^:\s]+$")


class EnforcementLevel(str, Enum):
    """Policy for how one-version violations affect the build outcome."""

    OFF = "off"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, text: str) -> EnforcementLevel:
        normalized = text.strip().lower()
        for level in cls:
            if level.value == normalized:
                return level
        accepted = ", ".join(level.value for level in cls)
        raise ValueError(f"unknown one-version enforcement level `{text}`; expected one of: {accepted}")


class ParameterFileType(str, Enum):
    """How arguments are written into an argument file."""

    SHELL_QUOTED = "shell_quoted"
    UNQUOTED = "unquoted"


@dataclass(frozen=True, order=True)
class RepositoryName:
    """Repository qualifier of a label.

    ``""`` is the default repository, ``"@"`` the main repository, and any other
    value is the bare name of an external repository.
    """

    name: str = ""

    @property
    def is_default(self) -> bool:
        return self.name == ""

    @property
    def is_main(self) -> bool:
        return self.name == "@"

    @property
    def is_external(self) -> bool:
        return not (self.is_default or self.is_main)


DEFAULT_REPOSITORY = RepositoryName("")
MAIN_REPOSITORY = RepositoryName("@")


@dataclass(frozen=True, order=True)
class Label:
    """Identity of the build target that produced an artifact."""

    repository: RepositoryName
    package: str
    name: str

    @classmethod
    def parse(cls, text: str) -> Label:
        """Parse ``[@repo]//package[:name]`` into a label."""
        raw = text.strip()
        repository = DEFAULT_REPOSITORY
        if raw.startswith("@"):
            sep = raw.find("//")
            if sep < 0:
                raise LabelSyntaxError(f"invalid label `{text}`: repository must be followed by `//`")
            repo = raw[1:sep]
            if repo == "":
                repository = MAIN_REPOSITORY
            elif _REPO_NAME_RE.match(repo):
                repository = RepositoryName(repo)
            else:
                raise LabelSyntaxError(f"invalid label `{text}`: bad repository name `{repo}`")
            raw = raw[sep:]

        if not raw.startswith("//"):
            raise LabelSyntaxError(f"invalid label `{text}`: must start with `//` or `@repo//`")
        body = raw[2:]
        if ":" in body:
            package, name = body.split(":", 1)
        else:
            package = body
            name = body.rsplit("/", 1)[-1]

        if package.startswith("/") or package.endswith("/") or "//" in package:
            raise LabelSyntaxError(f"invalid label `{text}`: malformed package `{package}`")
        if not name or not _TARGET_NAME_RE.match(name):
            raise LabelSyntaxError(f"invalid label `{text}`: missing or malformed target name")
        return cls(repository=repository, package=package, name=name)

    @property
    def repository_body(self) -> str:
        """Label text after the leading ``@`` of an external repository."""
        return f"{self.repository.name}//{self.package}:{self.name}"

    def __str__(self) -> str:
        if self.repository.is_external:
            return "@" + self.repository_body
        return f"//{self.package}:{self.name}"


@dataclass(frozen=True, order=True)
class Artifact:
    """Handle to a file the build graph will produce or consume."""

    exec_path: str

    @classmethod
    def of(cls, path: str | PurePosixPath) -> Artifact:
        pure = PurePosixPath(path)
        normalized = pure.as_posix()
        if normalized in ("", "."):
            raise ValueError("artifact path must not be empty")
        if pure.is_absolute() or ".." in pure.parts:
            raise ValueError(f"artifact path `{normalized}` must be relative to the execution root")
        return cls(exec_path=normalized)

    def __str__(self) -> str:
        return self.exec_path


@dataclass(frozen=True)
class JavaToolchain:
    """Toolchain capability relevant to one-version checking."""

    label: Label
    one_version_binary: Artifact | None = None
    one_version_whitelist: Artifact | None = None

    @property
    def toolchain_label(self) -> str:
        return str(self.label)


@dataclass(frozen=True)
class ParameterFileInfo:
    """Argument-file policy attached to a spawn action."""

    type: ParameterFileType = ParameterFileType.SHELL_QUOTED
    always_use: bool = True


@dataclass(frozen=True)
class SpawnAction:
    """A registered action: one executable run over declared inputs and outputs."""

    outputs: tuple[Artifact, ...]
    inputs: tuple[Artifact, ...]
    executable: Artifact
    arguments: tuple[str, ...]
    owner: Label
    param_file: ParameterFileInfo = field(default_factory=ParameterFileInfo)
    mnemonic: str = MNEMONIC
    progress_message: str = PROGRESS_MESSAGE

    @property
    def primary_output(self) -> Artifact:
        return self.outputs[0]

    def progress(self) -> str:
        return self.progress_message % self.owner

    def param_file_exec_path(self) -> str:
        return self.primary_output.exec_path + PARAM_FILE_SUFFIX

    def command_line(self) -> list[str]:
        """Process argv when arguments travel through the argument file."""
        if self.param_file.always_use:
            return [self.executable.exec_path, "@" + self.param_file_exec_path()]
        return [self.executable.exec_path, *self.arguments]

    def to_dict(self) -> dict[str, Any]:
        return {
            "mnemonic": self.mnemonic,
            "owner": str(self.owner),
            "progress_message": self.progress(),
            "executable": self.executable.exec_path,
            "arguments": list(self.arguments),
            "inputs": [a.exec_path for a in self.inputs],
            "outputs": [a.exec_path for a in self.outputs],
            "param_file": {
                "type": self.param_file.type.value,
                "always_use": self.param_file.always_use,
                "path": self.param_file_exec_path(),
            },
            "command_line": self.command_line(),
        }
