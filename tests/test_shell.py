"""Tests for node_starter.shell."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from node_starter.errors import CommandFailed, SpawnError
from node_starter.models import Workspace
from node_starter.shell import CommandRunner, step


def _python(code: str) -> tuple[str, ...]:
    return (sys.executable, "-c", code)


class TestRunCaptured:
    def test_returns_output(self, workspace: Workspace) -> None:
        result = CommandRunner(workspace).run_captured(*_python("print('hello')"))
        assert result.exit_code == 0
        assert result.stdout.strip() == "hello"

    def test_runs_in_workspace_root(self, workspace: Workspace) -> None:
        result = CommandRunner(workspace).run_captured(
            *_python("import os; print(os.getcwd())")
        )
        assert Path(result.stdout.strip()).resolve() == workspace.root.resolve()

    def test_passes_workspace_env(self, tmp_path: Path) -> None:
        workspace = Workspace(root=tmp_path, env={"NODE_STARTER_PROBE": "42"})
        result = CommandRunner(workspace).run_captured(
            *_python("import os; print(os.environ['NODE_STARTER_PROBE'])")
        )
        assert result.stdout.strip() == "42"

    def test_nonzero_exit_carries_code_and_stderr(self, workspace: Workspace) -> None:
        code = "import sys; sys.stderr.write('remote rejected\\n'); sys.exit(3)"
        with pytest.raises(CommandFailed) as excinfo:
            CommandRunner(workspace).run_captured(*_python(code))

        error = excinfo.value
        assert error.returncode == 3
        assert error.stderr == "remote rejected\n"
        assert error.command == sys.executable
        assert error.cmd_args == ["-c", code]
        assert error.exit_code == 1

    def test_missing_executable(self, workspace: Workspace) -> None:
        with pytest.raises(SpawnError, match="not found"):
            CommandRunner(workspace).run_captured("node-starter-no-such-tool", "x")


class TestRunInteractive:
    def test_success(self, workspace: Workspace) -> None:
        result = CommandRunner(workspace).run_interactive(*_python("pass"))
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_nonzero_exit(self, workspace: Workspace) -> None:
        with pytest.raises(CommandFailed) as excinfo:
            CommandRunner(workspace).run_interactive(*_python("raise SystemExit(2)"))
        assert excinfo.value.returncode == 2
        assert excinfo.value.stderr == ""

    def test_missing_executable_is_not_a_command_failure(
        self, workspace: Workspace
    ) -> None:
        with pytest.raises(SpawnError) as excinfo:
            CommandRunner(workspace).run_interactive("node-starter-no-such-tool")
        assert not isinstance(excinfo.value, CommandFailed)


def test_step_prints_header(capsys: pytest.CaptureFixture[str]) -> None:
    step("Publishing to npm")
    out = capsys.readouterr().out
    assert "Publishing to npm" in out
    assert "─" * 60 in out
