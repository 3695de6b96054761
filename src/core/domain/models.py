"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.
- Serialización estable del reporte de build (`model_dump(mode="json")`).

Nota:
- Estos modelos describen *qué* pasó en un build, no *cómo* se ejecutó.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from core.domain.recipe import Recipe


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommandSpec(BaseModel):
    """Una invocación de herramienta externa con flags fijos."""

    name: str = Field(..., min_length=1, description="Nombre del paso (p.ej. 'styles').")
    argv: list[str] = Field(..., min_length=1, description="Ejecutable + argumentos.")
    cwd: Path = Field(..., description="Directorio de trabajo del proceso.")

    def display(self) -> str:
        return " ".join(self.argv)


class StepResult(BaseModel):
    """Resultado de un paso del pipeline."""

    name: str = Field(..., min_length=1)
    argv: list[str] = Field(default_factory=list)
    returncode: int | None = Field(
        default=None,
        description="Código de salida; None si el proceso no terminó (timeout).",
    )
    duration_seconds: float = Field(default=0.0, ge=0.0)
    timed_out: bool = Field(default=False)
    stdout_tail: str = Field(default="")
    stderr_tail: str = Field(default="")

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


class OutputManifest(BaseModel):
    """Huella del directorio generado: ruta relativa POSIX -> sha256."""

    root: str = Field(..., description="Directorio del que se calculó la huella.")
    files: dict[str, str] = Field(default_factory=dict)

    @property
    def digest(self) -> str:
        """Digest agregado sobre las entradas ordenadas."""

        h = hashlib.sha256()
        for rel in sorted(self.files):
            h.update(rel.encode("utf-8"))
            h.update(b"\0")
            h.update(self.files[rel].encode("ascii"))
            h.update(b"\n")
        return h.hexdigest()

    def __len__(self) -> int:
        return len(self.files)


class BuildReport(BaseModel):
    """Agregado principal: un recipe ejecutado de punta a punta."""

    recipe: Recipe = Field(default=Recipe.BUILD)
    steps: list[StepResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=_utc_now)
    finished_at: datetime | None = None
    success: bool = False
    failed_step: str | None = None
    exit_code: int = 0
    manifest: OutputManifest | None = None

    @property
    def duration_seconds(self) -> float:
        return sum(step.duration_seconds for step in self.steps)


class StyleAuditResult(BaseModel):
    """Resultado de contrastar clases usadas en las páginas contra el CSS."""

    pages_scanned: int = Field(default=0, ge=0)
    classes_used: list[str] = Field(default_factory=list)
    missing_classes: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Clase ausente en el CSS -> páginas que la usan.",
    )

    @property
    def ok(self) -> bool:
        return not self.missing_classes
