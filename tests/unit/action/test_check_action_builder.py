"""Unit tests for the one-version check action builder."""

from __future__ import annotations

import pytest

from oneversion.action.builder import OneVersionCheckActionBuilder
from oneversion.errors import (
    REASON_BUILDER_CONSUMED,
    REASON_ENFORCEMENT_OFF,
    REASON_MISSING_FIELD,
    PreconditionError,
)
from oneversion.graph.context import AnalysisContext, ArtifactOwnerRegistry
from oneversion.types import (
    MNEMONIC,
    Artifact,
    EnforcementLevel,
    JavaToolchain,
    Label,
    ParameterFileType,
)

TARGET = Label.parse("//java/app:app_deploy")
TOOL = Artifact.of("bazel-out/host/bin/tools/oneversion")
WHITELIST = Artifact.of("tools/jdk/oneversion_whitelist.txt")
OUTPUT = Artifact.of("bazel-out/bin/java/app/app-one-version.txt")
JARS = (
    Artifact.of("bazel-out/bin/java/app/libapp.jar"),
    Artifact.of("bazel-out/bin/external/guava/guava.jar"),
)


def _toolchain(*, tool: Artifact | None = TOOL, whitelist: Artifact | None = WHITELIST) -> JavaToolchain:
    return JavaToolchain(
        label=Label.parse("//tools/jdk:toolchain"),
        one_version_binary=tool,
        one_version_whitelist=whitelist,
    )


def _context() -> AnalysisContext:
    owners = ArtifactOwnerRegistry()
    owners.register(JARS[0], Label.parse("//java/app:app"))
    owners.register(JARS[1], Label.parse("@guava//jar:jar"))
    return AnalysisContext(label=TARGET, owners=owners)


def _configured(toolchain: JavaToolchain | None = None) -> OneVersionCheckActionBuilder:
    return (
        OneVersionCheckActionBuilder.new_builder()
        .use_toolchain(toolchain or _toolchain())
        .check_jars(JARS)
        .output_artifact(OUTPUT)
        .with_enforcement_level(EnforcementLevel.ERROR)
    )


def test_build_registers_single_action() -> None:
    ctx = _context()

    result = _configured().build(ctx)

    assert result == OUTPUT
    assert ctx.errors == []
    assert len(ctx.actions) == 1
    action = ctx.actions[0]
    assert action.outputs == (OUTPUT,)
    assert action.inputs == (WHITELIST, *JARS)
    assert action.executable == TOOL
    assert action.mnemonic == MNEMONIC
    assert action.param_file.type is ParameterFileType.SHELL_QUOTED
    assert action.param_file.always_use is True
    assert action.progress() == "Checking for one-version violations in //java/app:app_deploy"
    assert list(action.arguments) == [
        "--output",
        OUTPUT.exec_path,
        "--whitelist",
        WHITELIST.exec_path,
        "--inputs",
        "bazel-out/bin/java/app/libapp.jar,//java/app:app",
        "bazel-out/bin/external/guava/guava.jar,@guava//jar:jar",
    ]
    assert ctx.action_for(OUTPUT) is action


def test_setters_chain_in_any_order_and_last_write_wins() -> None:
    ctx = _context()
    other_output = Artifact.of("bazel-out/bin/other.txt")

    (
        OneVersionCheckActionBuilder()
        .with_enforcement_level(EnforcementLevel.ERROR)
        .output_artifact(other_output)
        .check_jars(iter(JARS))
        .use_toolchain(_toolchain())
        .output_artifact(OUTPUT)
        .with_enforcement_level(EnforcementLevel.WARNING)
        .build(ctx)
    )

    action = ctx.actions[0]
    assert action.outputs == (OUTPUT,)
    assert "--succeed_on_found_violations" in action.arguments


def test_enforcement_off_is_rejected_before_state_changes() -> None:
    builder = OneVersionCheckActionBuilder().with_enforcement_level(EnforcementLevel.WARNING)

    with pytest.raises(PreconditionError, match="level is set to off") as excinfo:
        builder.with_enforcement_level(EnforcementLevel.OFF)
    assert excinfo.value.reason_code == REASON_ENFORCEMENT_OFF

    ctx = _context()
    builder.use_toolchain(_toolchain()).check_jars(JARS).output_artifact(OUTPUT).build(ctx)
    assert "--succeed_on_found_violations" in ctx.actions[0].arguments


@pytest.mark.parametrize("missing", ["toolchain", "jars", "output", "level"])
def test_missing_field_is_a_contract_violation(missing: str) -> None:
    builder = OneVersionCheckActionBuilder()
    if missing != "toolchain":
        builder.use_toolchain(_toolchain())
    if missing != "jars":
        builder.check_jars(JARS)
    if missing != "output":
        builder.output_artifact(OUTPUT)
    if missing != "level":
        builder.with_enforcement_level(EnforcementLevel.ERROR)
    ctx = _context()

    with pytest.raises(PreconditionError) as excinfo:
        builder.build(ctx)
    assert excinfo.value.reason_code == REASON_MISSING_FIELD
    assert ctx.errors == []
    assert ctx.actions == []


@pytest.mark.parametrize(
    "toolchain",
    [
        _toolchain(tool=None),
        _toolchain(whitelist=None),
        _toolchain(tool=None, whitelist=None),
    ],
)
def test_incapable_toolchain_reports_once_and_registers_nothing(toolchain: JavaToolchain) -> None:
    ctx = _context()

    result = _configured(toolchain).build(ctx)

    assert result == OUTPUT
    assert ctx.actions == []
    assert len(ctx.errors) == 1
    message = ctx.errors[0]
    assert "'//tools/jdk:toolchain'" in message
    assert "java_toolchain.oneversion" in message
    assert "java_toolchain.oneversion_whitelist" in message


def test_unresolved_jar_owner_fails_build() -> None:
    ctx = AnalysisContext(label=TARGET)

    with pytest.raises(PreconditionError, match="no owning target"):
        _configured().build(ctx)
    assert ctx.actions == []


def test_builder_is_single_use() -> None:
    builder = _configured()
    builder.build(_context())

    with pytest.raises(PreconditionError) as excinfo:
        builder.build(_context())
    assert excinfo.value.reason_code == REASON_BUILDER_CONSUMED

    with pytest.raises(PreconditionError):
        builder.output_artifact(OUTPUT)
