from __future__ import annotations

import pytest

from adapters.stylesheet_audit import audit_stylesheet, page_classes, stylesheet_classes


@pytest.mark.unit
def test_stylesheet_classes_unescapes_selectors():
    css = r"""
    /* .commented-out { } */
    .md\:flex{display:flex}
    .w-1\/2, .hover\:underline:hover { width: 50% }
    .\32xl\:p-4 { padding: 1rem }
    @media (min-width: 40.5rem) { .sm\:block { display: block } }
    .card > .title { background: url(img.png) }
    """

    found = stylesheet_classes(css)

    assert {"md:flex", "w-1/2", "hover:underline", "2xl:p-4", "sm:block", "card", "title"} <= found
    assert "commented-out" not in found
    assert "png" not in found
    assert "5rem" not in found


@pytest.mark.unit
def test_page_classes_collects_every_element():
    html = '<div class="a b"><p class="c">x</p><span>y</span></div>'

    assert page_classes(html) == {"a", "b", "c"}


@pytest.mark.unit
def test_audit_reports_classes_missing_from_stylesheet(tmp_path):
    out = tmp_path / "public"
    (out / "post").mkdir(parents=True)
    (out / "index.html").write_text('<body class="bg-white"></body>', encoding="utf-8")
    (out / "post" / "index.html").write_text('<body class="bg-white text-red-500 js-toggle"></body>', encoding="utf-8")
    css = tmp_path / "styles.css"
    css.write_text(".bg-white{background:#fff}", encoding="utf-8")

    result = audit_stylesheet(output_dir=out, stylesheet=css, ignore=["js-toggle"])

    assert result.pages_scanned == 2
    assert result.classes_used == ["bg-white", "js-toggle", "text-red-500"]
    assert result.missing_classes == {"text-red-500": ["post/index.html"]}
    assert result.ok is False


@pytest.mark.unit
def test_audit_passes_when_everything_is_compiled(tmp_path):
    out = tmp_path / "public"
    out.mkdir()
    (out / "index.html").write_text('<main class="prose"></main>', encoding="utf-8")
    css = tmp_path / "styles.css"
    css.write_text(".prose{max-width:65ch}", encoding="utf-8")

    assert audit_stylesheet(output_dir=out, stylesheet=css).ok
