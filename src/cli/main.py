"""CLI del task runner (Typer).

Por qué Typer:
- Cada recipe es un comando con flags tipados y `--help` gratuito.
- El exit code de la primera herramienta que falla se propaga con `typer.Exit`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from adapters.dev_supervisor import run_dev_processes
from adapters.json_exporter import export_build_report_json
from adapters.output_manifest import write_manifest
from adapters.process_runner import SubprocessRunner
from adapters.tools import tailwind_command, zola_serve_command
from cli import doctor
from cli.ui_components import (
    build_check_panel,
    build_recipes_table,
    build_report_table,
    print_banner,
    step_status,
)
from core.config import SiteSettings
from core.domain.models import BuildReport, StepResult
from core.errors import PipelineError
from core.services.build_pipeline import PipelineHooks, run_build
from core.services.deploy import deploy as run_deploy
from core.services.site_check import check_site

app = typer.Typer(
    help="Build, serve and publish the blog.",
    add_completion=False,
    invoke_without_command=True,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}")


def _settings(ctx: typer.Context) -> SiteSettings:
    return ctx.obj["settings"]


def _fail(exc: PipelineError) -> typer.Exit:
    _err_console.print(f"[red]error:[/red] {exc}")
    return typer.Exit(code=exc.exit_code)


def _hooks() -> PipelineHooks:
    def start(name: str, argv: list[str]) -> None:
        _console.print(f"[cyan]→ {name}[/cyan] [dim]{' '.join(argv)}[/dim]")

    def done(result: StepResult) -> None:
        _console.print(step_status(result), f"{result.name} [dim]{result.duration_seconds:.2f}s[/dim]")

    return PipelineHooks(step_start=start, step_done=done)


@app.callback()
def main(
    ctx: typer.Context,
    project_root: Optional[Path] = typer.Option(
        None, "--project-root", "-C", help="Site directory (defaults to BLOG_PROJECT_ROOT or cwd)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner."),
) -> None:
    overrides = {"project_root": project_root} if project_root is not None else {}
    try:
        settings = SiteSettings(**overrides)
    except ValidationError as exc:
        _err_console.print(f"[red]invalid configuration:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = {"settings": settings}

    if ctx.invoked_subcommand is None:
        # Default recipe: list what is available.
        if not quiet:
            print_banner(_console)
        _console.print(build_recipes_table())
    elif not quiet and ctx.invoked_subcommand in {"build", "deploy"}:
        print_banner(_console)


@app.command("list")
def list_recipes() -> None:
    """List the available recipes."""

    _console.print(build_recipes_table())


@app.command()
def build(
    ctx: typer.Context,
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON build report here."),
) -> None:
    """Compile the stylesheet, render the site and package the output."""

    settings = _settings(ctx)
    runner = SubprocessRunner(timeout_seconds=settings.command_timeout_seconds)
    try:
        result = run_build(settings=settings, runner=runner, hooks=_hooks())
    except PipelineError as exc:
        if report is not None:
            failed = BuildReport(success=False, exit_code=exc.exit_code, failed_step=getattr(exc, "step", None))
            export_build_report_json(report=failed, output_path=report)
        raise _fail(exc) from exc

    if report is not None:
        export_build_report_json(report=result, output_path=report)
        _console.print(f"[dim]Report written to {report}[/dim]")

    _console.print(build_report_table(result))
    if not result.success:
        _err_console.print(f"[red]error:[/red] step {result.failed_step!r} failed")
        raise typer.Exit(code=result.exit_code)
    _console.print(f"[green]Packaged[/green] {len(result.manifest or [])} files into {settings.package_dir}")


def _serve(specs_factory) -> None:
    try:
        specs = specs_factory()
        code = run_dev_processes(specs)
    except PipelineError as exc:
        raise _fail(exc) from exc
    raise typer.Exit(code=code)


@app.command()
def dev(ctx: typer.Context) -> None:
    """Run the site dev server and the stylesheet watcher together."""

    settings = _settings(ctx)
    _serve(lambda: [zola_serve_command(settings), tailwind_command(settings, watch=True)])


@app.command("zola-dev")
def zola_dev(ctx: typer.Context) -> None:
    """Run the site dev server only."""

    settings = _settings(ctx)
    _serve(lambda: [zola_serve_command(settings)])


@app.command("tailwind-dev")
def tailwind_dev(ctx: typer.Context) -> None:
    """Watch and recompile the stylesheet only."""

    settings = _settings(ctx)
    _serve(lambda: [tailwind_command(settings, watch=True)])


@app.command()
def deploy(
    ctx: typer.Context,
    skip_build: bool = typer.Option(False, "--skip-build", help="Publish the existing package as-is."),
    remote: Optional[str] = typer.Option(None, "--remote", help="Remote name or URL (overrides BLOG_DEPLOY_REMOTE)."),
    branch: Optional[str] = typer.Option(None, "--branch", help="Target branch (overrides BLOG_DEPLOY_BRANCH)."),
) -> None:
    """Build, then force-push the packaged output to an orphan branch."""

    settings = _settings(ctx)
    updates = {k: v for k, v in {"deploy_remote": remote, "deploy_branch": branch}.items() if v}
    if updates:
        settings = settings.model_copy(update=updates)

    runner = SubprocessRunner(timeout_seconds=settings.command_timeout_seconds)
    try:
        result = run_deploy(settings=settings, runner=runner, skip_build=skip_build, hooks=_hooks())
    except PipelineError as exc:
        raise _fail(exc) from exc

    outcome = result.outcome
    _console.print(
        f"[green]Deployed[/green] {outcome.files} files as {outcome.commit[:12]} "
        f"to {outcome.remote_url} ({outcome.branch})"
    )


@app.command()
def check(
    ctx: typer.Context,
    against: Optional[Path] = typer.Option(None, "--against", help="Reference manifest to compare with."),
    write: Optional[Path] = typer.Option(None, "--write-manifest", help="Save the current manifest here."),
    ignore: list[str] = typer.Option([], "--ignore", help="Class name to skip (repeatable)."),
) -> None:
    """Audit the built output: stylesheet coverage and manifest drift."""

    settings = _settings(ctx)
    try:
        result = check_site(settings=settings, against=against, ignore=ignore)
    except PipelineError as exc:
        raise _fail(exc) from exc

    if write is not None:
        write_manifest(result.manifest, write)
    _console.print(build_check_panel(result))
    if not result.ok:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
