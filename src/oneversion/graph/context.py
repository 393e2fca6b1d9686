"""In-memory build-graph collaborators for analysing a single target."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from oneversion.types import Artifact, Label, SpawnAction

logger = logging.getLogger(__name__)


@dataclass
class ArtifactOwnerRegistry:
    """Maps artifacts back to the target that produced them."""

    owners: dict[Artifact, Label] = field(default_factory=dict)

    def register(self, artifact: Artifact, owner: Label) -> None:
        self.owners[artifact] = owner

    def owner_of(self, artifact: Artifact) -> Label | None:
        return self.owners.get(artifact)


@dataclass
class AnalysisContext:
    """Rule context that records diagnostics and registered actions."""

    label: Label
    owners: ArtifactOwnerRegistry = field(default_factory=ArtifactOwnerRegistry)
    errors: list[str] = field(default_factory=list)
    actions: list[SpawnAction] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def rule_error(self, message: str) -> None:
        logger.error("%s: %s", self.label, message)
        self.errors.append(message)

    def register_action(self, action: SpawnAction) -> None:
        self.actions.append(action)

    def artifact_owner(self, artifact: Artifact) -> Label | None:
        return self.owners.owner_of(artifact)

    def action_for(self, output: Artifact) -> SpawnAction | None:
        """Return the registered action producing ``output``, if any."""
        for action in self.actions:
            if output in action.outputs:
                return action
        return None
