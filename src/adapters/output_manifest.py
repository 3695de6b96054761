"""Huella (sha256) del directorio generado.

Sirve para comprobar que dos builds de la misma entrada producen la misma
salida byte a byte, y para exportar la huella junto al reporte de build.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path

from core.domain.models import OutputManifest

_CHUNK = 1 << 16


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest()


def build_manifest(directory: Path) -> OutputManifest:
    root = directory.resolve()
    files: dict[str, str] = {}
    for path in sorted(root.rglob("*")):
        if path.is_file() and not path.is_symlink():
            files[path.relative_to(root).as_posix()] = _sha256_file(path)
    return OutputManifest(root=str(root), files=files)


@dataclass
class ManifestDiff:
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not (self.added or self.removed or self.changed)


def diff_manifests(before: OutputManifest, after: OutputManifest) -> ManifestDiff:
    old, new = before.files, after.files
    return ManifestDiff(
        added=sorted(set(new) - set(old)),
        removed=sorted(set(old) - set(new)),
        changed=sorted(p for p in set(old) & set(new) if old[p] != new[p]),
    )


def write_manifest(manifest: OutputManifest, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"digest": manifest.digest, "files": manifest.files}
    output_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return output_path


def read_manifest(path: Path) -> OutputManifest:
    data = json.loads(path.read_text(encoding="utf-8"))
    return OutputManifest(root=str(path.parent), files=data.get("files", {}))
