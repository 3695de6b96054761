from __future__ import annotations

import pytest

from core.errors import StepFailedError, exit_status


@pytest.mark.unit
@pytest.mark.parametrize(
    ("returncode", "expected"),
    [(0, 0), (2, 2), (None, 1), (-9, 137), (-15, 143), (-2, 130)],
)
def test_exit_status(returncode, expected):
    assert exit_status(returncode) == expected


@pytest.mark.unit
def test_step_failed_error_uses_shell_status():
    assert StepFailedError("site", -9).exit_code == 137
    assert StepFailedError("site", None).exit_code == 1
    assert StepFailedError("site", 4).exit_code == 4
    assert "timed out" in str(StepFailedError("styles", None))
