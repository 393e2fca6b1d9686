"""Load and validate one-version check manifests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]

from oneversion.schemas.validator import validate_data
from oneversion.types import Artifact, EnforcementLevel, JavaToolchain, Label

if TYPE_CHECKING:
    from pathlib import Path

MANIFEST_SCHEMA = "check_manifest"

MANIFEST_REASON_MISSING = "MANIFEST_MISSING"
MANIFEST_REASON_PARSE_ERROR = "MANIFEST_PARSE_ERROR"
MANIFEST_REASON_SCHEMA_INVALID = "MANIFEST_SCHEMA_INVALID"

# Keep this literal deterministic and sorted in write path.
MANIFEST_TEMPLATE: dict[str, Any] = {
    "target": "//java/app:app_deploy",
    "enforcement_level": "warning",
    "output": "bazel-out/k8-fastbuild/bin/java/app/app-one-version.txt",
    "toolchain": {
        "label": "//tools/jdk:toolchain",
        "oneversion": "bazel-out/host/bin/tools/jdk/oneversion",
        "oneversion_whitelist": "tools/jdk/oneversion_whitelist.txt",
    },
    "jars": [
        {
            "path": "bazel-out/k8-fastbuild/bin/java/app/libapp.jar",
            "owner": "//java/app:app",
        },
        {
            "path": "bazel-out/k8-fastbuild/bin/external/guava/jar/guava.jar",
            "owner": "@guava//jar:jar",
        },
    ],
}


class ManifestError(ValueError):
    """Check manifest could not be loaded or is invalid."""

    reason_code: str

    def __init__(self, message: str, reason_code: str = MANIFEST_REASON_SCHEMA_INVALID) -> None:
        super().__init__(message)
        self.reason_code = reason_code


@dataclass(frozen=True)
class JarSpec:
    """A jar in the checked closure and the target that produced it."""

    artifact: Artifact
    owner: Label


@dataclass(frozen=True)
class CheckManifest:
    """Normalized one-version check request read from disk."""

    target: Label
    enforcement_level: EnforcementLevel
    output: Artifact
    toolchain: JavaToolchain
    jars: tuple[JarSpec, ...]


def ensure_default_manifest(path: Path, *, force: bool = False) -> Path:
    """Write the template manifest deterministically."""
    if path.exists() and not force:
        raise FileExistsError(f"Manifest already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(MANIFEST_TEMPLATE, sort_keys=True), encoding="utf-8")
    return path


def load_manifest(path: Path) -> CheckManifest:
    """Load, validate, and normalize a check manifest."""
    if not path.exists():
        raise ManifestError(
            f"Missing check manifest at {path}. Run `oneversion init {path}` first.",
            MANIFEST_REASON_MISSING,
        )

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ManifestError(f"{path.name} parse error: {exc}", MANIFEST_REASON_PARSE_ERROR) from exc
    if not isinstance(raw, dict):
        raise ManifestError(
            f"{path.name} parse error: expected mapping at top level",
            MANIFEST_REASON_PARSE_ERROR,
        )

    if "enforcement_level" in raw:
        raw["enforcement_level"] = _level_scalar(raw["enforcement_level"])

    try:
        validate_data(raw, MANIFEST_SCHEMA)
    except ValueError as exc:
        raise ManifestError(str(exc)) from exc

    return manifest_from_dict(raw)


def manifest_from_dict(raw: dict[str, Any]) -> CheckManifest:
    """Normalize an already schema-valid manifest mapping."""
    try:
        level = EnforcementLevel.parse(raw["enforcement_level"])
        target = Label.parse(raw["target"])
        toolchain_raw = raw["toolchain"]
        toolchain = JavaToolchain(
            label=Label.parse(toolchain_raw["label"]),
            one_version_binary=_optional_artifact(toolchain_raw.get("oneversion")),
            one_version_whitelist=_optional_artifact(toolchain_raw.get("oneversion_whitelist")),
        )
        jars = tuple(
            JarSpec(artifact=Artifact.of(entry["path"]), owner=Label.parse(entry["owner"]))
            for entry in raw["jars"]
        )
        output = Artifact.of(raw["output"])
    except ValueError as exc:
        raise ManifestError(str(exc)) from exc

    owners: dict[Artifact, Label] = {}
    for jar in jars:
        known = owners.setdefault(jar.artifact, jar.owner)
        if known != jar.owner:
            raise ManifestError(
                f"jar {jar.artifact.exec_path} is listed with conflicting owners {known} and {jar.owner}"
            )

    return CheckManifest(
        target=target,
        enforcement_level=level,
        output=output,
        toolchain=toolchain,
        jars=jars,
    )


def _level_scalar(value: Any) -> Any:
    # YAML 1.1 reads a bare `off` as False.
    if value is False:
        return EnforcementLevel.OFF.value
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _optional_artifact(value: str | None) -> Artifact | None:
    if value is None:
        return None
    return Artifact.of(value)
