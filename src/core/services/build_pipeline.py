"""Build pipeline orchestration.

The pipeline chains three external steps (style compilation, content
collection, packaging) strictly in sequence. It never prints: progress is
reported through `PipelineHooks` so the CLI can render it, and the outcome
is returned as a `BuildReport` whose `exit_code` is the status of the first
failing step.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from adapters.output_manifest import build_manifest
from adapters.publisher import package_output
from adapters.tools import tailwind_command, zola_build_command
from core.config import SiteSettings
from core.domain.models import BuildReport, CommandSpec, StepResult
from core.domain.recipe import Recipe
from core.errors import BuildError, exit_status
from core.interfaces.runner import CommandRunner

PACKAGE_STEP = "package"


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    step_start: Callable[[str, list[str]], None] | None = None
    step_done: Callable[[StepResult], None] | None = None


def build_steps(settings: SiteSettings) -> list[CommandSpec]:
    """External invocations of a build, in execution order.

    The stylesheet goes first: the generator copies `static/` verbatim, so
    the compiled asset must exist before it runs.
    """

    return [tailwind_command(settings), zola_build_command(settings)]


def _finish(report: BuildReport, *, failed: StepResult | None = None) -> BuildReport:
    report.finished_at = datetime.now(timezone.utc)
    if failed is None:
        report.success = True
        report.exit_code = 0
    else:
        report.success = False
        report.failed_step = failed.name
        report.exit_code = exit_status(failed.returncode) or 1
    return report


def run_build(
    *,
    settings: SiteSettings,
    runner: CommandRunner,
    hooks: PipelineHooks | None = None,
) -> BuildReport:
    hooks = hooks or PipelineHooks()
    report = BuildReport(recipe=Recipe.BUILD)

    for spec in build_steps(settings):
        if hooks.step_start:
            hooks.step_start(spec.name, spec.argv)
        logger.info("Running step {}", spec.name)
        result = runner.run(spec)
        report.steps.append(result)
        if hooks.step_done:
            hooks.step_done(result)
        if not result.ok:
            logger.error("Step {} failed (status {}); aborting", spec.name, result.returncode)
            return _finish(report, failed=result)

    output_dir = settings.resolve(settings.output_dir)
    if not output_dir.is_dir():
        raise BuildError(f"Generator finished but {output_dir} does not exist")

    if hooks.step_start:
        hooks.step_start(PACKAGE_STEP, [str(output_dir), str(settings.resolve(settings.package_dir))])
    target = package_output(source=output_dir, target=settings.resolve(settings.package_dir))
    report.manifest = build_manifest(target)
    packaged = StepResult(name=PACKAGE_STEP, argv=[str(output_dir), str(target)], returncode=0)
    report.steps.append(packaged)
    if hooks.step_done:
        hooks.step_done(packaged)

    logger.info("Build finished: {} files, digest {}", len(report.manifest), report.manifest.digest[:12])
    return _finish(report)
