"""Argv de las herramientas externas (zola, tailwindcss).

Each builder returns a `CommandSpec` with a fixed set of flags; there is no
branching beyond the optional overrides exposed in `SiteSettings`.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from core.config import SiteSettings
from core.domain.models import CommandSpec
from core.errors import ToolNotFoundError

DEFAULT_OUTPUT_DIR = Path("public")


def resolve_executable(name: str) -> str:
    """Return the absolute path of `name`, as found on PATH."""

    found = shutil.which(name)
    if not found:
        raise ToolNotFoundError(name)
    return found


def tailwind_command(settings: SiteSettings, *, watch: bool = False) -> CommandSpec:
    argv = [
        resolve_executable(settings.tailwind_bin),
        "-i",
        str(settings.styles_input),
        "-o",
        str(settings.styles_output),
    ]
    if watch:
        argv.append("--watch=always")
    if settings.minify_css:
        argv.append("--minify")
    return CommandSpec(name="tailwind-dev" if watch else "styles", argv=argv, cwd=settings.root)


def zola_build_command(settings: SiteSettings) -> CommandSpec:
    argv = [resolve_executable(settings.zola_bin), "build"]
    if settings.base_url:
        argv += ["--base-url", settings.base_url]
    if settings.output_dir != DEFAULT_OUTPUT_DIR:
        # zola refuses to overwrite a non-default output dir without --force.
        argv += ["--output-dir", str(settings.output_dir), "--force"]
    return CommandSpec(name="site", argv=argv, cwd=settings.root)


def zola_serve_command(settings: SiteSettings) -> CommandSpec:
    argv = [resolve_executable(settings.zola_bin), "serve"]
    if settings.serve_interface:
        argv += ["--interface", settings.serve_interface]
    if settings.serve_port:
        argv += ["--port", str(settings.serve_port)]
    return CommandSpec(name="zola-dev", argv=argv, cwd=settings.root)
