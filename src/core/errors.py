"""Errores del pipeline.

Each error carries the process exit code the CLI should terminate with, so
the "first failing sub-command" status survives up to the shell.
"""

from __future__ import annotations


def exit_status(returncode: int | None) -> int:
    """Shell exit status for a child's `returncode`.

    None (never finished) maps to 1; death by signal N maps to 128 + N.
    """

    if returncode is None:
        return 1
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode


class PipelineError(Exception):
    """Base error for every recipe failure."""

    exit_code: int = 1

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ToolNotFoundError(PipelineError):
    """An external executable is not on PATH."""

    exit_code = 127

    def __init__(self, tool: str) -> None:
        super().__init__(f"Executable not found: {tool!r}")
        self.tool = tool


class StepFailedError(PipelineError):
    """An external tool exited non-zero (or timed out)."""

    def __init__(self, step: str, returncode: int | None) -> None:
        reason = "timed out" if returncode is None else f"exited with status {returncode}"
        super().__init__(f"Step {step!r} {reason}", exit_code=exit_status(returncode) or 1)
        self.step = step
        self.returncode = returncode


class BuildError(PipelineError):
    """The build ran but its output is not usable."""


class DeployError(PipelineError):
    """Publishing the packaged output failed."""
