"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import check_site
from core.config import SiteSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_tool(name: str) -> tuple[bool, str]:
    found = shutil.which(name)
    if found:
        return True, found
    return False, "not found on PATH"


def _settings(ctx: typer.Context) -> SiteSettings:
    if isinstance(ctx.obj, dict) and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return SiteSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings(ctx)

    table = Table(title="blog-pipeline doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    failed = False

    # Tools
    for label, binary in (("Site generator", settings.zola_bin), ("CSS compiler", settings.tailwind_bin), ("git", settings.git_bin)):
        ok, detail = _check_tool(binary)
        failed = failed or not ok
        table.add_row(label, "OK" if ok else "FAIL", detail)

    # Layout
    root = settings.root
    has_config = (root / "config.toml").is_file()
    failed = failed or not has_config
    table.add_row("Site config", "OK" if has_config else "FAIL", str(root / "config.toml"))

    styles = settings.resolve(settings.styles_input)
    failed = failed or not styles.is_file()
    table.add_row("Stylesheet source", "OK" if styles.is_file() else "FAIL", str(styles))

    table.add_row("Output dir", "OK", str(settings.resolve(settings.output_dir)))
    table.add_row("Package dir", "OK", str(settings.resolve(settings.package_dir)))
    table.add_row("Deploy target", "OK", f"{settings.deploy_remote} -> {settings.deploy_branch}")

    # Connectivity (best-effort)
    if settings.site_url:
        ok_http, detail_http = asyncio.run(check_site(settings.site_url, settings=settings))
        table.add_row("Published site", "OK" if ok_http else "WARN", f"{settings.site_url}: {detail_http}")
    else:
        table.add_row("Published site", "OPTIONAL", "BLOG_SITE_URL not set")

    _console.print(table)

    if failed:
        _console.print(
            "\n[yellow]Note:[/yellow] install the missing tools (zola, tailwindcss v4, git) "
            "or point BLOG_ZOLA_BIN / BLOG_TAILWIND_BIN / BLOG_GIT_BIN at them."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-deploy")
def setup_deploy(ctx: typer.Context) -> None:
    """Interactive deploy setup (stores config in the user config .env)."""

    settings = _settings(ctx)

    remote = typer.prompt("Remote (name or URL)", default=settings.deploy_remote, show_default=True).strip()
    branch = typer.prompt("Pages branch", default=settings.deploy_branch, show_default=True).strip()
    site_url = typer.prompt("Published site URL (optional)", default=settings.site_url or "", show_default=False).strip()

    if not remote or not branch:
        raise typer.BadParameter("remote and branch are required")

    env_path = write_user_env_vars(
        {
            "BLOG_DEPLOY_REMOTE": remote,
            "BLOG_DEPLOY_BRANCH": branch,
            "BLOG_SITE_URL": site_url or None,
        }
    )
    _console.print(f"[green]Saved deploy config to:[/green] {env_path}")