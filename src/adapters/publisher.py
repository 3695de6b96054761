"""Empaquetado: copia íntegra del directorio generado al destino.

Por qué reemplazar en vez de sincronizar:
- Una página cuyo contenido se borró no debe sobrevivir en el paquete.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from loguru import logger

from core.errors import BuildError


def package_output(*, source: Path, target: Path) -> Path:
    """Reemplaza `target` por una copia de `source` y devuelve `target`."""

    source = source.resolve()
    target = target.resolve()

    if not source.is_dir():
        raise BuildError(f"Output directory does not exist: {source}")
    if target == source or source.is_relative_to(target):
        raise BuildError(f"Refusing to package {source} into {target}")
    if target.is_relative_to(source):
        raise BuildError(f"Package target {target} is inside the output directory")

    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.exists():
        shutil.rmtree(target)

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, target, symlinks=True)
    logger.debug("Packaged {} -> {}", source, target)
    return target
