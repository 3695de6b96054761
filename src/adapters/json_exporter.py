"""Exportación JSON del reporte de build.

Por qué JSON:
- Interoperabilidad con CI y otras herramientas (comparar builds, auditar).
- Permite persistir el resultado sin depender de la salida de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import BuildReport


def export_build_report_json(*, report: BuildReport, output_path: Path) -> Path:
    """Exporta `BuildReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    if report.manifest is not None:
        payload["manifest"]["digest"] = report.manifest.digest
    payload["duration_seconds"] = report.duration_seconds
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
