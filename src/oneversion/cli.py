"""oneversion CLI - plan one-version check actions from a manifest."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from oneversion import __version__
from oneversion.artifacts.canonical_json import action_to_dict, canonical_dumps, write_json
from oneversion.graph.params import write_param_file
from oneversion.manifest import ManifestError, ensure_default_manifest, load_manifest
from oneversion.planner import PlanResult, plan_from_manifest
from oneversion.types import EnforcementLevel

LEVEL_ENVVAR = "ONEVERSION_ENFORCEMENT_LEVEL"

cli = typer.Typer(
    name="oneversion",
    help="Plan one-version checker actions for a jar closure",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _parse_level(level: str | None) -> EnforcementLevel | None:
    if level is None:
        return None
    try:
        return EnforcementLevel.parse(level)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(2) from exc


def _plan(manifest: Path, level: str | None) -> PlanResult | None:
    """Load the manifest and build its action; exits on manifest or toolchain errors."""
    override = _parse_level(level)
    try:
        loaded = load_manifest(manifest)
    except ManifestError as exc:
        typer.echo(f"[{exc.reason_code}] {exc}", err=True)
        raise typer.Exit(2) from exc

    result = plan_from_manifest(loaded, level=override)
    if result is None:
        console.print("[yellow]one-version enforcement is off; no check action planned[/yellow]")
        return None
    if result.errors:
        for message in result.errors:
            typer.echo(f"ERROR: {loaded.target}: {message}", err=True)
        raise typer.Exit(1)
    return result


@cli.command("version")
def version() -> None:
    """Print the oneversion version."""
    typer.echo(__version__)


@cli.command("init")
def init(
    path: Path = typer.Argument(Path("oneversion.yaml"), help="Manifest path to create."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing manifest."),
) -> None:
    """Write a template check manifest."""
    try:
        written = ensure_default_manifest(path, force=force)
    except FileExistsError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    typer.echo(f"manifest={written}")


@cli.command("plan")
def plan(
    manifest: Path = typer.Argument(..., help="Check manifest (YAML)."),
    level: str | None = typer.Option(
        None,
        "--level",
        envvar=LEVEL_ENVVAR,
        help="Override the manifest enforcement level (off, warning, error).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the canonical JSON plan."),
    out: Path | None = typer.Option(None, "--out", help="Write the canonical JSON plan to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Build the one-version action and print its command line."""
    _configure_logging(verbose)
    result = _plan(manifest, level)
    if result is None:
        return
    action = result.action
    assert action is not None

    payload = action_to_dict(action)
    if out is not None:
        write_json(out, payload)
        typer.echo(f"plan={out}")
    if as_json:
        typer.echo(canonical_dumps(payload))
        return
    if out is None:
        typer.echo(f"mnemonic={action.mnemonic}")
        typer.echo(f"progress={action.progress()}")
        typer.echo(f"executable={action.executable.exec_path}")
        for arg in action.arguments:
            typer.echo(arg)


@cli.command("params")
def params(
    manifest: Path = typer.Argument(..., help="Check manifest (YAML)."),
    root: Path = typer.Option(Path("."), "--root", help="Execution root to write the argument file under."),
    level: str | None = typer.Option(
        None,
        "--level",
        envvar=LEVEL_ENVVAR,
        help="Override the manifest enforcement level (off, warning, error).",
    ),
) -> None:
    """Write the action's shell-quoted argument file."""
    result = _plan(manifest, level)
    if result is None:
        return
    action = result.action
    assert action is not None

    path = write_param_file(action, root)
    typer.echo(f"params={path}")
    typer.echo(f"command={' '.join(action.command_line())}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
