"""Concurrent per-workspace command dispatch."""

from __future__ import annotations

import asyncio
import os
import shlex
from collections.abc import Iterable, Sequence

from loguru import logger

from execws.core.types import Assignment, DispatchResult, Invocation

LAUNCH_FAILURE_EXIT_CODE = 1
SIGNAL_EXIT_BASE = 128


def plan_invocations(
    program: str,
    fixed_args: Sequence[str],
    assignment: Assignment,
    project_root: str,
    *,
    all_if_no_paths: bool = False,
) -> list[Invocation]:
    """Build the launch list: fixed args first, then the workspace's routed args."""

    selected = assignment.selected(all_if_no_paths=all_if_no_paths)
    invocations: list[Invocation] = []
    for workspace in assignment.workspaces:
        if workspace not in selected:
            logger.info("dispatch.skip workspace={}", workspace)
            continue
        invocations.append(
            Invocation(
                workspace=workspace,
                cwd=os.path.normpath(os.path.join(project_root, workspace)),
                program=program,
                args=[*fixed_args, *assignment.args[workspace]],
            )
        )
    if assignment.unassigned and invocations:
        logger.debug("dispatch.unassigned tokens={}", assignment.unassigned)
    return invocations


async def run_invocation(invocation: Invocation) -> DispatchResult:
    """Launch one process with inherited standard streams and wait for it."""

    logger.info("dispatch.start workspace={} argv={}", invocation.workspace, shlex.join(invocation.argv))
    try:
        process = await asyncio.create_subprocess_exec(
            invocation.program,
            *invocation.args,
            cwd=invocation.cwd,
        )
    except OSError as exc:
        logger.error("dispatch.error workspace={} error={}", invocation.workspace, exc)
        return DispatchResult(workspace=invocation.workspace, error=str(exc))

    returncode = await process.wait()
    exit_code = SIGNAL_EXIT_BASE - returncode if returncode < 0 else returncode
    if exit_code != 0:
        logger.error("dispatch.exit workspace={} code={}", invocation.workspace, exit_code)
    else:
        logger.info("dispatch.exit workspace={} code={}", invocation.workspace, exit_code)
    return DispatchResult(workspace=invocation.workspace, exit_code=exit_code)


async def run_invocations(invocations: Sequence[Invocation], *, sequential: bool = False) -> list[DispatchResult]:
    """Run every invocation to completion; one failure never cancels the others."""

    if sequential:
        return [await run_invocation(invocation) for invocation in invocations]
    return list(await asyncio.gather(*(run_invocation(invocation) for invocation in invocations)))


def aggregate_exit_code(results: Iterable[DispatchResult]) -> int:
    """Maximum non-zero exit code; launch failures count as 1; 0 when all succeeded or none ran."""

    aggregate = 0
    for result in results:
        code = LAUNCH_FAILURE_EXIT_CODE if result.error is not None else (result.exit_code or 0)
        aggregate = max(aggregate, code)
    return aggregate


async def dispatch(
    program: str,
    fixed_args: Sequence[str],
    assignment: Assignment,
    project_root: str,
    *,
    all_if_no_paths: bool = False,
    sequential: bool = False,
) -> int:
    """Run `program` in every selected workspace and return the aggregate exit code."""

    invocations = plan_invocations(program, fixed_args, assignment, project_root, all_if_no_paths=all_if_no_paths)
    if not invocations:
        logger.info("dispatch.none no workspace matched the given arguments")
        return 0

    results = await run_invocations(invocations, sequential=sequential)
    failed = [result.workspace for result in results if not result.ok]
    if failed:
        logger.warning("dispatch.done failed={} of {}: {}", len(failed), len(results), ", ".join(failed))
    else:
        logger.info("dispatch.done workspaces={}", len(results))
    return aggregate_exit_code(results)
