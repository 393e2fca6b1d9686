"""Builder that registers the one-version check action in a build graph."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from oneversion.action.args import one_version_args
from oneversion.errors import (
    REASON_BUILDER_CONSUMED,
    REASON_ENFORCEMENT_OFF,
    PreconditionError,
    check_not_none,
)
from oneversion.types import (
    Artifact,
    EnforcementLevel,
    Label,
    ParameterFileInfo,
    ParameterFileType,
    SpawnAction,
)

logger = logging.getLogger(__name__)

UNSUPPORTED_TOOLCHAIN_MESSAGE = (
    "one version enforcement was requested but it is not supported by the current "
    "Java toolchain '{toolchain}'; see the "
    "java_toolchain.oneversion and java_toolchain.oneversion_whitelist "
    "attributes"
)


class OneVersionToolchain(Protocol):
    """Toolchain capability consumed by the builder."""

    @property
    def one_version_binary(self) -> Artifact | None: ...

    @property
    def one_version_whitelist(self) -> Artifact | None: ...

    @property
    def toolchain_label(self) -> str: ...


class RuleContext(Protocol):
    """Build-graph context of the target requesting the check."""

    @property
    def label(self) -> Label: ...

    def rule_error(self, message: str) -> None: ...

    def register_action(self, action: SpawnAction) -> None: ...

    def artifact_owner(self, artifact: Artifact) -> Label | None: ...


class _State(Enum):
    CONFIGURING = "configuring"
    BUILT = "built"


@dataclass(frozen=True)
class CheckRequest:
    """Validated, complete inputs for one check action."""

    enforcement_level: EnforcementLevel
    output: Artifact
    toolchain: OneVersionToolchain
    jars: tuple[Artifact, ...]


class OneVersionCheckActionBuilder:
    """Accumulates a check request and registers it exactly once.

    Setters may be called in any order and repeated (last write wins). ``build``
    consumes the builder; any later call raises ``PreconditionError``.
    """

    def __init__(self) -> None:
        self._state = _State.CONFIGURING
        self._enforcement_level: EnforcementLevel | None = None
        self._output: Artifact | None = None
        self._toolchain: OneVersionToolchain | None = None
        self._jars: tuple[Artifact, ...] | None = None

    @classmethod
    def new_builder(cls) -> OneVersionCheckActionBuilder:
        return cls()

    def use_toolchain(self, toolchain: OneVersionToolchain) -> OneVersionCheckActionBuilder:
        self._ensure_configuring()
        self._toolchain = toolchain
        return self

    def check_jars(self, jars: Iterable[Artifact]) -> OneVersionCheckActionBuilder:
        self._ensure_configuring()
        self._jars = tuple(jars)
        return self

    def output_artifact(self, output: Artifact) -> OneVersionCheckActionBuilder:
        self._ensure_configuring()
        self._output = output
        return self

    def with_enforcement_level(self, level: EnforcementLevel) -> OneVersionCheckActionBuilder:
        if level is EnforcementLevel.OFF:
            raise PreconditionError(
                "one version enforcement actions shouldn't be built if the enforcement "
                "level is set to off",
                REASON_ENFORCEMENT_OFF,
            )
        self._ensure_configuring()
        self._enforcement_level = level
        return self

    def build(self, ctx: RuleContext) -> Artifact:
        """Register the check action and return the output artifact.

        When the toolchain lacks the checker binary or its whitelist, a rule error is
        reported and the output is returned without any action producing it.
        """
        request = self._finalize()

        tool = request.toolchain.one_version_binary
        whitelist = request.toolchain.one_version_whitelist
        if tool is None or whitelist is None:
            ctx.rule_error(UNSUPPORTED_TOOLCHAIN_MESSAGE.format(toolchain=request.toolchain.toolchain_label))
            return request.output

        arguments = one_version_args(
            request.output,
            whitelist,
            request.enforcement_level,
            request.jars,
            ctx.artifact_owner,
        )
        action = SpawnAction(
            outputs=(request.output,),
            inputs=(whitelist, *request.jars),
            executable=tool,
            arguments=tuple(arguments),
            owner=ctx.label,
            param_file=ParameterFileInfo(type=ParameterFileType.SHELL_QUOTED, always_use=True),
        )
        ctx.register_action(action)
        logger.debug(
            "registered %s action for %s over %d jars", action.mnemonic, ctx.label, len(request.jars)
        )
        return request.output

    def _finalize(self) -> CheckRequest:
        self._ensure_configuring()
        request = CheckRequest(
            enforcement_level=check_not_none(self._enforcement_level, "enforcement level is not set"),
            output=check_not_none(self._output, "output artifact is not set"),
            toolchain=check_not_none(self._toolchain, "toolchain is not set"),
            jars=check_not_none(self._jars, "jars to check are not set"),
        )
        self._state = _State.BUILT
        return request

    def _ensure_configuring(self) -> None:
        if self._state is _State.BUILT:
            raise PreconditionError(
                "one-version check builder was already built; builders are single-use",
                REASON_BUILDER_CONSUMED,
            )
