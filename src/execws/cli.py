"""exec-ws command-line entry point."""

from __future__ import annotations

import asyncio
import os
import shlex
from pathlib import Path

import typer
from loguru import logger

from execws import __version__
from execws.config import Settings, load_settings
from execws.core import assign, split_command
from execws.errors import ConfigurationError, NoCommandError
from execws.logging_utils import configure_logging
from execws.manifest import discover_workspaces
from execws.runner import dispatch, plan_invocations

app = typer.Typer(
    name="exec-ws",
    help="Run a command in every monorepo workspace that one of its path arguments points into.",
    add_completion=False,
)

# Options are only recognized before the first positional argument; everything
# after it, unknown flags included, belongs to the dispatched command.
_PASSTHROUGH_CONTEXT = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"exec-ws {__version__}")
        raise typer.Exit()


def _split_invocation(command: str | None, args: list[str]) -> tuple[str, list[str], list[str]]:
    """Return the program, its fixed arguments and the tokens left to route."""

    if command is not None:
        program, fixed_args = split_command(command)
        return program, fixed_args, args
    if not args:
        raise NoCommandError("no command given; pass a command or use --command")
    return args[0], [], args[1:]


@app.command(context_settings=_PASSTHROUGH_CONTEXT)
def main(
    args: list[str] | None = typer.Argument(None, help="Command and arguments, or only arguments with --command"),
    command: str | None = typer.Option(None, "--command", "-c", help="Command to run in every matched workspace"),
    root: Path | None = typer.Option(  # noqa: B008
        None, "--root", help="Project root holding the workspace manifest", file_okay=False
    ),
    manifest: Path | None = typer.Option(None, "--manifest", help="Workspace manifest file"),  # noqa: B008
    probe_files: bool = typer.Option(False, "--probe-files", help="Treat bare names of existing files as paths"),
    all_if_no_paths: bool = typer.Option(
        False, "--all-if-no-paths", help="Run in every workspace when no path argument matches one"
    ),
    sequential: bool = typer.Option(False, "--sequential", help="Run workspaces one at a time"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the planned invocations without running them"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level"),
    verbose: bool = typer.Option(False, "--verbose", help="Timestamped logs on stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Route path arguments to the workspaces containing them and run the command there."""

    _ = version

    project_root = Path(os.path.normpath(os.path.abspath(root or Path.cwd())))
    try:
        settings = load_settings(manifest=manifest, log_level=log_level, log_profile="verbose" if verbose else None)
        configure_logging(profile=settings.log_profile, level=settings.log_level)
        exit_code = _run(
            settings,
            project_root,
            command=command,
            args=list(args or []),
            probe_files=probe_files or settings.probe_files,
            all_if_no_paths=all_if_no_paths or settings.all_if_no_paths,
            sequential=sequential or settings.sequential,
            dry_run=dry_run,
        )
    except ConfigurationError as exc:
        logger.error("config.error {}", exc)
        raise typer.Exit(1) from exc
    raise typer.Exit(exit_code)


def _run(
    settings: Settings,
    project_root: Path,
    *,
    command: str | None,
    args: list[str],
    probe_files: bool,
    all_if_no_paths: bool,
    sequential: bool,
    dry_run: bool,
) -> int:
    program, fixed_args, tokens = _split_invocation(command, args)
    if not tokens and not all_if_no_paths:
        raise NoCommandError("no arguments to route; pass workspace paths or use --all-if-no-paths")
    workspaces = discover_workspaces(project_root, settings.manifest)
    assignment = assign(tokens, workspaces, str(project_root), probe_files=probe_files)

    if dry_run:
        for invocation in plan_invocations(
            program, fixed_args, assignment, str(project_root), all_if_no_paths=all_if_no_paths
        ):
            typer.echo(f"{invocation.workspace}: {shlex.join(invocation.argv)}")
        return 0

    return asyncio.run(
        dispatch(
            program,
            fixed_args,
            assignment,
            str(project_root),
            all_if_no_paths=all_if_no_paths,
            sequential=sequential,
        )
    )
