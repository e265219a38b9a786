"""Write scaffold files without clobbering the user's work."""

from __future__ import annotations

from pathlib import Path

import click

from .errors import WriteError
from .models import WriteOutcome


class ScaffoldWriter:
    """Create files under ``root``, skipping ones that already exist.

    An existing file is only replaced when ``overwrite`` is set; otherwise it
    is left untouched and reported as skipped. Nothing is ever deleted.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(
        self, relative_path: str, content: str, overwrite: bool = False
    ) -> WriteOutcome:
        """Write ``content`` to ``root / relative_path``.

        Parent directories are created as needed.

        Raises:
            WriteError: If the directory or file cannot be written.
        """
        destination = self.root / relative_path
        existed = destination.exists()
        if existed and not overwrite:
            click.secho(
                f"Skipping {relative_path}: file already exists "
                "(use --force to overwrite).",
                fg="yellow",
            )
            return WriteOutcome.SKIPPED

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WriteError(
                f"Could not write {relative_path}: {exc.strerror or exc}"
            ) from exc

        if existed:
            click.secho(f"Wrote {relative_path}", fg="green")
            return WriteOutcome.OVERWRITTEN
        click.secho(f"Created {relative_path}", fg="green")
        return WriteOutcome.CREATED

    def ensure_directory(self, relative_path: str) -> bool:
        """Create a directory if missing. Returns True when it was created."""
        target = self.root / relative_path
        if target.is_dir():
            click.echo(f"Folder {relative_path} already exists.")
            return False
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(
                f"Could not create {relative_path}: {exc.strerror or exc}"
            ) from exc
        click.secho(f"Folder {relative_path} created.", fg="green")
        return True
