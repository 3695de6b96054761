"""Post-build checks on the generated output."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from adapters.output_manifest import ManifestDiff, build_manifest, diff_manifests, read_manifest
from adapters.stylesheet_audit import audit_stylesheet
from core.config import SiteSettings
from core.domain.models import OutputManifest, StyleAuditResult
from core.errors import BuildError


@dataclass
class SiteCheckResult:
    audit: StyleAuditResult
    manifest: OutputManifest
    drift: ManifestDiff | None = None
    notes: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.audit.ok and (self.drift is None or self.drift.identical)


def check_site(
    *,
    settings: SiteSettings,
    against: Path | None = None,
    ignore: list[str] | None = None,
) -> SiteCheckResult:
    output_dir = settings.resolve(settings.output_dir)
    if not output_dir.is_dir():
        raise BuildError(f"No build output at {output_dir}; run `blog build` first")

    stylesheet = settings.resolve(settings.styles_output)
    if not stylesheet.is_file():
        raise BuildError(f"Compiled stylesheet not found: {stylesheet}")

    result = SiteCheckResult(
        audit=audit_stylesheet(output_dir=output_dir, stylesheet=stylesheet, ignore=ignore or ()),
        manifest=build_manifest(output_dir),
    )
    if result.audit.pages_scanned == 0:
        result.notes.append(f"No HTML pages found under {output_dir}")
    if against is not None:
        result.drift = diff_manifests(read_manifest(against), result.manifest)
    return result
