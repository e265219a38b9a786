"""Interactive questions asked during a release."""

from __future__ import annotations

from typing import Protocol

import click


class Prompter(Protocol):
    def ask(self, text: str, default: str) -> str: ...

    def confirm(self, text: str, default: bool = False) -> bool: ...


class ClickPrompter:
    """Ask on the terminal with click; an empty answer picks the default."""

    def ask(self, text: str, default: str) -> str:
        return click.prompt(text, default=default, show_default=True)

    def confirm(self, text: str, default: bool = False) -> bool:
        return click.confirm(text, default=default)
