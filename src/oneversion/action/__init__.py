"""One-version check action encoding and construction."""

from oneversion.action.args import generalized_label, jar_map_argv, one_version_args
from oneversion.action.builder import (
    CheckRequest,
    OneVersionCheckActionBuilder,
    OneVersionToolchain,
    RuleContext,
)

__all__ = [
    "CheckRequest",
    "OneVersionCheckActionBuilder",
    "OneVersionToolchain",
    "RuleContext",
    "generalized_label",
    "jar_map_argv",
    "one_version_args",
]
