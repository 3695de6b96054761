"""Ejecución de herramientas externas (subprocess).

Por qué un adaptador:
- Estandariza timeouts, captura de salida y logging de cada paso.
- Facilita testeo: el pipeline recibe cualquier `CommandRunner`.
"""

from __future__ import annotations

import subprocess
import time

from loguru import logger

from core.domain.models import CommandSpec, StepResult
from core.errors import ToolNotFoundError

TAIL_MAX_CHARS = 8000


def tail_text(text: str | bytes | None, max_chars: int = TAIL_MAX_CHARS) -> str:
    if not text:
        return ""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8", "replace")
    if len(text) <= max_chars:
        return text
    return text[-max_chars:]


class SubprocessRunner:
    """Runs one command at a time and waits for it to exit.

    By default the child inherits stdout/stderr, so tool diagnostics reach the
    terminal unchanged. With ``capture=True`` only the tail of each stream is
    kept on the result.
    """

    def __init__(self, *, capture: bool = False, timeout_seconds: float | None = None) -> None:
        self._capture = capture
        self._timeout = timeout_seconds

    def run(self, spec: CommandSpec) -> StepResult:
        logger.debug("[{}] $ {} (cwd={})", spec.name, spec.display(), spec.cwd)
        started = time.monotonic()
        try:
            proc = subprocess.run(
                spec.argv,
                cwd=str(spec.cwd),
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=self._capture,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(spec.argv[0]) from exc
        except subprocess.TimeoutExpired as exc:
            logger.warning("[{}] timed out after {}s", spec.name, self._timeout)
            return StepResult(
                name=spec.name,
                argv=spec.argv,
                returncode=None,
                timed_out=True,
                duration_seconds=time.monotonic() - started,
                stdout_tail=tail_text(exc.stdout),
                stderr_tail=tail_text(exc.stderr),
            )

        return StepResult(
            name=spec.name,
            argv=spec.argv,
            returncode=proc.returncode,
            duration_seconds=time.monotonic() - started,
            stdout_tail=tail_text(proc.stdout),
            stderr_tail=tail_text(proc.stderr),
        )
