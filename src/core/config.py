"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (procesos, git, HTTP) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "blog-pipeline"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "blog-pipeline"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "blog-pipeline"
    return Path.home() / ".config" / "blog-pipeline"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# blog-pipeline user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class SiteSettings(BaseSettings):
    """Configuración central del pipeline de build.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI/adapters.

    Las rutas relativas se resuelven contra `project_root` (ver `resolve`).
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOG_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero, luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    project_root: Path = Field(
        default=Path("."),
        description="Raíz del sitio (donde viven config.toml, content/ y styles.css).",
    )

    # Style compilation
    styles_input: Path = Field(
        default=Path("styles.css"),
        description="Hoja de estilos fuente para tailwindcss.",
    )
    styles_output: Path = Field(
        default=Path("static/styles.css"),
        description="Asset compilado; zola lo copia desde static/.",
    )
    minify_css: bool = Field(default=False, description="Pasar --minify a tailwindcss.")

    # Content collection
    output_dir: Path = Field(default=Path("public"), description="Salida del generador.")
    base_url: str | None = Field(
        default=None,
        description="Override de base_url para `zola build`.",
    )
    serve_interface: str | None = Field(default=None, description="Interfaz para `zola serve`.")
    serve_port: int | None = Field(default=None, ge=1, le=65535, description="Puerto para `zola serve`.")

    # Packaging
    package_dir: Path = Field(
        default=Path("result"),
        description="Destino del empaquetado (copia íntegra de output_dir).",
    )

    # External tools
    zola_bin: str = Field(default="zola", min_length=1)
    tailwind_bin: str = Field(default="tailwindcss", min_length=1)
    git_bin: str = Field(default="git", min_length=1)
    command_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por comando del build (None = sin límite).",
    )

    # Deployment
    deploy_remote: str = Field(
        default="origin",
        min_length=1,
        description="Nombre de remote del repo del proyecto, o URL directa.",
    )
    deploy_branch: str = Field(default="gh-pages", min_length=1)
    deploy_message: str = Field(default="Deploy to GitHub Pages", min_length=1)
    git_user_name: str = Field(default="GitHub Actions", min_length=1)
    git_user_email: str = Field(default="actions@github.com", min_length=3)

    # Diagnostics
    site_url: str | None = Field(
        default=None,
        description="URL pública del blog (solo para `doctor`).",
    )
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Nivel mínimo de loguru (case-insensitive).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    def resolve(self, path: Path) -> Path:
        """Resuelve una ruta de config relativa a `project_root`."""

        if path.is_absolute():
            return path
        return (self.project_root / path).resolve()

    @property
    def root(self) -> Path:
        return self.project_root.resolve()
