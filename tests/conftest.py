from __future__ import annotations

import os
import re
from pathlib import Path

import pytest

from core.config import SiteSettings
from core.domain.models import CommandSpec, StepResult

PAGE_TEMPLATE = """<!doctype html>
<html>
<head><link rel="stylesheet" href="/styles.css"></head>
<body class="bg-white md:flex">
<main class="prose">{body}</main>
</body>
</html>
"""

COMPILED_CSS = """/*! tailwindcss v4 */
@layer theme, base, components, utilities;
@layer utilities {
  .bg-white { background-color: #fff; }
  .prose { max-width: 65ch; }
  @media (width >= 48rem) {
    .md\\:flex { display: flex; }
  }
}
"""


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the developer's own `.env` files and BLOG_* variables out of tests."""

    for key in list(os.environ):
        if key.upper().startswith("BLOG_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setitem(
        SiteSettings.model_config,
        "env_file",
        (".env", str(tmp_path / "xdg" / "blog-pipeline" / ".env")),
    )
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "blog"
    (root / "content").mkdir(parents=True)
    (root / "templates").mkdir()
    (root / "static").mkdir()
    (root / "config.toml").write_text('base_url = "https://example.org"\n', encoding="utf-8")
    (root / "styles.css").write_text('@import "tailwindcss";\n', encoding="utf-8")
    (root / "content" / "hello.md").write_text("+++\ntitle = \"Hello\"\n+++\nHello world\n", encoding="utf-8")
    (root / "content" / "second.md").write_text("+++\ntitle = \"Second\"\n+++\nAnother post\n", encoding="utf-8")
    return root


@pytest.fixture
def settings(site: Path) -> SiteSettings:
    return SiteSettings(_env_file=None, project_root=site)


@pytest.fixture
def fake_which(monkeypatch):
    """Every tool resolves to a fake absolute path."""

    def which(name: str) -> str:
        return f"/fake/bin/{Path(name).name}"

    monkeypatch.setattr("adapters.tools.shutil.which", which)
    return which


class FakeToolRunner:
    """Stands in for tailwindcss and zola, deterministically.

    - `tailwindcss -i X -o Y` writes a fixed stylesheet to Y.
    - `zola build` renders content/*.md into public/<stem>/index.html and
      copies static/ next to it, starting from a clean output dir.
    """

    def __init__(self, *, fail: dict[str, int] | None = None, timeout: set[str] | None = None) -> None:
        self.calls: list[CommandSpec] = []
        self._fail = fail or {}
        self._timeout = timeout or set()

    def run(self, spec: CommandSpec) -> StepResult:
        self.calls.append(spec)
        if spec.name in self._timeout:
            return StepResult(name=spec.name, argv=spec.argv, returncode=None, timed_out=True)
        if spec.name in self._fail:
            return StepResult(name=spec.name, argv=spec.argv, returncode=self._fail[spec.name])

        tool = Path(spec.argv[0]).name
        if tool == "tailwindcss":
            out = spec.cwd / spec.argv[spec.argv.index("-o") + 1]
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(COMPILED_CSS, encoding="utf-8")
        elif tool == "zola" and spec.argv[1] == "build":
            self._render(spec.cwd)
        return StepResult(name=spec.name, argv=spec.argv, returncode=0)

    @staticmethod
    def _render(root: Path) -> None:
        import shutil

        public = root / "public"
        if public.exists():
            shutil.rmtree(public)
        public.mkdir()
        for md in sorted((root / "content").glob("*.md")):
            body = re.sub(r"\+\+\+.*?\+\+\+\n", "", md.read_text(encoding="utf-8"), flags=re.DOTALL)
            page = public / md.stem / "index.html"
            page.parent.mkdir(parents=True)
            page.write_text(PAGE_TEMPLATE.format(body=body.strip()), encoding="utf-8")
        for asset in (root / "static").rglob("*"):
            if asset.is_file():
                dest = public / asset.relative_to(root / "static")
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_bytes(asset.read_bytes())


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    return FakeToolRunner()
