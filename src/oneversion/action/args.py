"""Command-line encoding for the one-version checker."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from oneversion.errors import REASON_UNRESOLVED_OWNER, PreconditionError
from oneversion.types import Artifact, EnforcementLevel, Label

OUTPUT_FLAG = "--output"
WHITELIST_FLAG = "--whitelist"
SUCCEED_ON_VIOLATIONS_FLAG = "--succeed_on_found_violations"
INPUTS_FLAG = "--inputs"

OwnerLookup = Callable[[Artifact], "Label | None"]


def generalized_label(label: Label) -> str:
    """Render an owner label for the argument file.

    External repository labels get a single ``@`` sentinel so the checker can tell
    them apart from labels in the main repository.
    """
    if label.repository.is_default or label.repository.is_main:
        return str(label)
    return "@" + label.repository_body


def jar_map_argv(jars: Iterable[Artifact], owner_of: OwnerLookup) -> list[str]:
    """Return ``--inputs`` followed by one ``path,owner`` token per jar, in order."""
    args = [INPUTS_FLAG]
    for jar in jars:
        owner = owner_of(jar)
        if owner is None:
            raise PreconditionError(
                f"jar {jar.exec_path} has no owning target; cannot attribute one-version violations",
                REASON_UNRESOLVED_OWNER,
            )
        args.append(",".join((jar.exec_path, generalized_label(owner))))
    return args


def one_version_args(
    output: Artifact,
    whitelist: Artifact,
    enforcement_level: EnforcementLevel,
    jars: Iterable[Artifact],
    owner_of: OwnerLookup,
) -> list[str]:
    """Build the full ordered checker argv."""
    args = [OUTPUT_FLAG, output.exec_path, WHITELIST_FLAG, whitelist.exec_path]
    if enforcement_level is EnforcementLevel.WARNING:
        args.append(SUCCEED_ON_VIOLATIONS_FLAG)
    args.extend(jar_map_argv(jars, owner_of))
    return args
