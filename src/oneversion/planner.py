"""Drive the action builder from a check manifest."""

from __future__ import annotations

from dataclasses import dataclass

from oneversion.action.builder import OneVersionCheckActionBuilder
from oneversion.graph.context import AnalysisContext, ArtifactOwnerRegistry
from oneversion.manifest import CheckManifest
from oneversion.types import Artifact, EnforcementLevel, SpawnAction


@dataclass(frozen=True)
class PlanResult:
    """Outcome of analysing one manifest."""

    output: Artifact
    context: AnalysisContext

    @property
    def action(self) -> SpawnAction | None:
        return self.context.action_for(self.output)

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(self.context.errors)


def plan_from_manifest(
    manifest: CheckManifest,
    *,
    level: EnforcementLevel | None = None,
) -> PlanResult | None:
    """Build the check action for ``manifest``.

    Returns ``None`` when the effective enforcement level is ``OFF``; no builder is
    constructed in that case.
    """
    effective = level or manifest.enforcement_level
    if effective is EnforcementLevel.OFF:
        return None

    owners = ArtifactOwnerRegistry()
    for jar in manifest.jars:
        owners.register(jar.artifact, jar.owner)
    ctx = AnalysisContext(label=manifest.target, owners=owners)

    output = (
        OneVersionCheckActionBuilder.new_builder()
        .use_toolchain(manifest.toolchain)
        .check_jars(jar.artifact for jar in manifest.jars)
        .output_artifact(manifest.output)
        .with_enforcement_level(effective)
        .build(ctx)
    )
    return PlanResult(output=output, context=ctx)
