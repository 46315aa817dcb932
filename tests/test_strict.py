import sys

import pytest

from safescript.core.errors import CommandFailedError, MissingDependencyError, UnsetVariableError
from safescript.core.strict import (
    inherited_path, require_command, require_env, run_command, run_pipeline,
)

PY = sys.executable

def test_run_command_returns_stdout():
    assert run_command([PY, "-c", "print('hi')"]).strip() == "hi"

def test_run_command_nonzero_raises():
    with pytest.raises(CommandFailedError) as ei:
        run_command([PY, "-c", "import sys; sys.stderr.write('nope'); sys.exit(3)"])
    assert ei.value.returncode == 3
    assert ei.value.detail == "nope"
    assert PY in ei.value.command

def test_run_command_unchecked():
    assert run_command([PY, "-c", "import sys; sys.exit(1)"], check=False) == ""

def test_pipeline_passes_data_through():
    out = run_pipeline([
        [PY, "-c", "print('a'); print('b')"],
        [PY, "-c", "import sys; print(sys.stdin.read().upper(), end='')"],
    ])
    assert out == "A\nB\n"

def test_pipeline_fails_on_any_stage():
    with pytest.raises(CommandFailedError) as ei:
        run_pipeline([
            [PY, "-c", "import sys; sys.exit(4)"],
            [PY, "-c", "import sys; sys.stdin.read()"],
        ])
    assert ei.value.returncode == 4

def test_pipeline_needs_a_stage():
    with pytest.raises(ValueError):
        run_pipeline([])

def test_require_env():
    assert require_env("HOME_X", {"HOME_X": "/h"}) == "/h"
    with pytest.raises(UnsetVariableError, match="unbound variable"):
        require_env("MISSING_VAR", {})

def test_require_command_found(tmp_path):
    tool = tmp_path / "mytool"
    tool.write_text("#!/bin/sh\n")
    tool.chmod(0o755)
    assert require_command("mytool", path=str(tmp_path)) == str(tool)

def test_require_command_missing(tmp_path):
    with pytest.raises(MissingDependencyError, match="Require nothing-here to be there."):
        require_command("nothing-here", path=str(tmp_path))

def test_inherited_path(monkeypatch):
    monkeypatch.setenv("PATH", "/opt/bin")
    assert inherited_path() == "/opt/bin"

def test_pipeline_with_noisy_stderr_does_not_stall():
    noisy = "import sys; sys.stderr.write('x' * 300000); print('hi')"
    out = run_pipeline([
        [PY, "-c", noisy],
        [PY, "-c", "import sys; print(sys.stdin.read().strip())"],
    ])
    assert out == "hi\n"

def test_pipeline_failing_stage_keeps_stderr():
    with pytest.raises(CommandFailedError) as ei:
        run_pipeline([
            [PY, "-c", "print('a')"],
            [PY, "-c", "import sys; sys.stdin.read(); sys.stderr.write('bad input'); sys.exit(2)"],
        ])
    assert ei.value.returncode == 2
    assert ei.value.detail == "bad input"

def test_pipeline_missing_program_cleans_up(tmp_path):
    with pytest.raises(OSError):
        run_pipeline([
            [PY, "-c", "import time; time.sleep(30)"],
            [str(tmp_path / "no-such-program")],
        ])
