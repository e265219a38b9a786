"""Stand-ins for the command runner and the terminal."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from node_starter.errors import CommandFailed
from node_starter.models import CommandResult

Call = tuple[str, ...]


class FakeRunner:
    """Records commands instead of running them.

    Args:
        outputs: stdout returned for captured commands, keyed by full argv.
        failures: exit codes for commands that should fail, keyed by argv.
        hooks: callables run when a command is issued, keyed by argv.
    """

    def __init__(
        self,
        outputs: dict[Call, str] | None = None,
        failures: dict[Call, int] | None = None,
        hooks: dict[Call, Callable[[], Any]] | None = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.hooks = hooks or {}
        self.calls: list[Call] = []

    def _issue(self, call: Call) -> None:
        self.calls.append(call)
        if call in self.hooks:
            self.hooks[call]()
        if call in self.failures:
            raise CommandFailed(call[0], call[1:], self.failures[call], "fake failure")

    def run_interactive(self, command: str, *args: str) -> CommandResult:
        self._issue((command, *args))
        return CommandResult()

    def run_captured(self, command: str, *args: str) -> CommandResult:
        call = (command, *args)
        self._issue(call)
        return CommandResult(stdout=self.outputs.get(call, ""))


class ScriptedPrompter:
    """Answers prompts from a script and records the questions asked."""

    def __init__(
        self, answers: list[str] | None = None, confirms: list[bool] | None = None
    ) -> None:
        self.answers = list(answers or [])
        self.confirms = list(confirms or [])
        self.questions: list[str] = []

    def ask(self, text: str, default: str) -> str:
        self.questions.append(text)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {text}")
        return self.answers.pop(0)

    def confirm(self, text: str, default: bool = False) -> bool:
        self.questions.append(text)
        if not self.confirms:
            raise AssertionError(f"unexpected confirm: {text}")
        return self.confirms.pop(0)


def write_descriptor(root: Path, data: dict[str, Any]) -> Path:
    path = root / "package.json"
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path
