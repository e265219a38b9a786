"""Shell utilities.

Provides a small wrapper around subprocess calls for running npm and git
inside a workspace, plus output formatting helpers.
"""

from __future__ import annotations

import os
import shutil
import subprocess

import click

from .errors import CommandFailed, SpawnError
from .models import CommandResult, Workspace


class CommandRunner:
    """Run external commands in a workspace, one at a time.

    Two modes are offered. Interactive runs share the terminal with the
    child, so tools like ``npm init`` can prompt the user and builds can
    stream progress. Captured runs collect stdout/stderr as text for
    commands whose output is parsed, like ``git status``.

    Launch failures (executable missing, permission denied) raise
    SpawnError; a non-zero exit raises CommandFailed.
    """

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace

    def _env(self) -> dict[str, str] | None:
        if self.workspace.env is None:
            return None
        return {**os.environ, **self.workspace.env}

    def _resolve(
        self, command: str, args: tuple[str, ...], env: dict[str, str] | None
    ) -> str:
        search_path = (env or os.environ).get("PATH")
        executable = shutil.which(command, path=search_path)
        if executable is None:
            raise SpawnError(command, args, "command not found")
        return executable

    def _spawn(
        self, command: str, args: tuple[str, ...], *, capture: bool
    ) -> subprocess.CompletedProcess[str]:
        env = self._env()
        executable = self._resolve(command, args, env)
        try:
            return subprocess.run(
                [executable, *args],
                cwd=self.workspace.root,
                env=env,
                capture_output=capture,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise SpawnError(command, args, exc.strerror or str(exc)) from exc

    def run_interactive(self, command: str, *args: str) -> CommandResult:
        """Run a command attached to the caller's terminal.

        Args:
            command: Executable name or path (e.g., "npm").
            *args: Arguments (e.g., "init").

        Returns:
            CommandResult with exit code 0 and no captured output.

        Raises:
            SpawnError: If the executable could not be launched.
            CommandFailed: If the command exited non-zero.
        """
        result = self._spawn(command, args, capture=False)
        if result.returncode != 0:
            raise CommandFailed(command, args, result.returncode)
        return CommandResult(exit_code=0)

    def run_captured(self, command: str, *args: str) -> CommandResult:
        """Run a command with stdout and stderr captured as text.

        Raises:
            SpawnError: If the executable could not be launched.
            CommandFailed: If the command exited non-zero. The captured
                stderr is attached verbatim.
        """
        result = self._spawn(command, args, capture=True)
        if result.returncode != 0:
            raise CommandFailed(command, args, result.returncode, result.stderr)
        return CommandResult(
            exit_code=0, stdout=result.stdout, stderr=result.stderr
        )


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of the release pipeline in terminal output.
    """
    click.echo(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
