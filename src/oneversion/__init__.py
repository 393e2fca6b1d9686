"""Build-graph action construction for the one-version jar checker."""

from oneversion.action import OneVersionCheckActionBuilder, one_version_args
from oneversion.types import (
    Artifact,
    EnforcementLevel,
    JavaToolchain,
    Label,
    ParameterFileType,
    RepositoryName,
    SpawnAction,
)

__version__ = "0.3.0"

__all__ = [
    "Artifact",
    "EnforcementLevel",
    "JavaToolchain",
    "Label",
    "OneVersionCheckActionBuilder",
    "ParameterFileType",
    "RepositoryName",
    "SpawnAction",
    "__version__",
    "one_version_args",
]
