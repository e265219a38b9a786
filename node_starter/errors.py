"""Error types raised by node-starter.

Every error is a ``click.ClickException`` so the CLI reports it as a single
``Error: ...`` line on stderr and exits with status 1. Nothing is retried:
components raise and the command line reports.
"""

from __future__ import annotations

from collections.abc import Sequence

import click


class StarterError(click.ClickException):
    """Base class for all node-starter failures."""


class InvalidInput(StarterError):
    """Rejected user input. Raised before any side effect is performed."""


class InvalidReleaseKind(InvalidInput):
    def __init__(self, kind: str) -> None:
        super().__init__(
            f"Invalid release type: {kind!r} (expected patch, minor or major)"
        )
        self.kind = kind


class InvalidChoice(InvalidInput):
    def __init__(self, answer: str, allowed: Sequence[str]) -> None:
        super().__init__(
            f"Invalid choice: {answer!r} (expected one of {', '.join(allowed)})"
        )
        self.answer = answer


class AbortedByUser(StarterError):
    """The user explicitly chose to stop."""


class AbortedDirtyTree(AbortedByUser):
    def __init__(self) -> None:
        super().__init__("Release aborted: working tree has uncommitted changes.")


class DescriptorReadError(StarterError):
    """package.json is missing, unreadable, or not a JSON object."""


class DescriptorWriteError(StarterError):
    """package.json could not be written."""


class WriteError(StarterError):
    """A scaffold file could not be written."""


class ConfigError(StarterError):
    """node-starter.toml is malformed."""


class SpawnError(StarterError):
    """An external command could not be launched at all."""

    def __init__(self, command: str, args: Sequence[str], reason: str) -> None:
        super().__init__(f"Could not launch {format_command(command, args)}: {reason}")
        self.command = command
        self.cmd_args = list(args)


class CommandFailed(StarterError):
    """An external command was launched but exited non-zero."""

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        exit_code: int,
        stderr: str = "",
    ) -> None:
        message = f"{format_command(command, args)} exited with code {exit_code}"
        if stderr.strip():
            message += f"\n{stderr.rstrip()}"
        super().__init__(message)
        self.command = command
        self.cmd_args = list(args)
        # click reads ``exit_code`` as the process status, so the child's
        # status is kept under its subprocess name.
        self.returncode = exit_code
        self.stderr = stderr


def format_command(command: str, args: Sequence[str]) -> str:
    return " ".join([command, *args])
