"""Auditoría: clases usadas por las páginas vs. hoja de estilos compilada.

The utility compiler only emits classes it found while scanning sources, so a
class used by a rendered page but absent from the compiled asset means the
stylesheet was built from stale input.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from bs4 import BeautifulSoup

from core.domain.models import StyleAuditResult

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_PRELUDE_RE = re.compile(r"([^{};]*)\{")
_CLASS_RE = re.compile(
    r"\.(-?(?:[_a-zA-Z]|\\[0-9a-fA-F]{1,6}\s?|\\[^\n0-9a-fA-F]|[^\x00-\x7f])"
    r"(?:[_a-zA-Z0-9-]|\\[0-9a-fA-F]{1,6}\s?|\\[^\n0-9a-fA-F]|[^\x00-\x7f])*)"
)
_ESCAPE_RE = re.compile(r"\\([0-9a-fA-F]{1,6})\s?|\\(.)")


def _unescape(ident: str) -> str:
    def repl(match: re.Match[str]) -> str:
        if match.group(1):
            return chr(int(match.group(1), 16))
        return match.group(2)

    return _ESCAPE_RE.sub(repl, ident)


def stylesheet_classes(css: str) -> set[str]:
    """Class names defined by selectors in `css` (escapes resolved)."""

    css = _COMMENT_RE.sub("", css)
    found: set[str] = set()
    for match in _PRELUDE_RE.finditer(css):
        prelude = match.group(1).strip()
        if not prelude or prelude.startswith("@"):
            continue
        for cls in _CLASS_RE.findall(prelude):
            found.add(_unescape(cls))
    return found


def page_classes(html: str) -> set[str]:
    soup = BeautifulSoup(html, "html.parser")
    out: set[str] = set()
    for tag in soup.find_all(class_=True):
        value = tag.get("class")
        if isinstance(value, str):
            value = value.split()
        out.update(c for c in value or [] if c)
    return out


def audit_stylesheet(
    *,
    output_dir: Path,
    stylesheet: Path,
    ignore: Iterable[str] = (),
) -> StyleAuditResult:
    """Compare classes of every `*.html` under `output_dir` with `stylesheet`."""

    defined = stylesheet_classes(stylesheet.read_text(encoding="utf-8"))
    ignored = set(ignore)

    used: set[str] = set()
    missing: dict[str, list[str]] = {}
    pages = sorted(output_dir.rglob("*.html"))
    for page in pages:
        rel = page.relative_to(output_dir).as_posix()
        classes = page_classes(page.read_text(encoding="utf-8", errors="replace"))
        used.update(classes)
        for cls in sorted(classes - defined - ignored):
            missing.setdefault(cls, []).append(rel)

    return StyleAuditResult(
        pages_scanned=len(pages),
        classes_used=sorted(used),
        missing_classes=dict(sorted(missing.items())),
    )
