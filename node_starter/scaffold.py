"""Scaffold a TypeScript npm package into a workspace.

Each step checks what already exists and only fills in what is missing, so
``node-starter init`` can be re-run at any time. Existing files are replaced
only with ``force``; package.json is merged, never replaced.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import BaseModel

from .config import StarterSettings
from .descriptor import (
    DEFAULT_SCRIPTS,
    DescriptorEditor,
    ensure_package_fields,
    package_meta,
)
from .files import ScaffoldWriter
from .models import PackageMeta, WriteOutcome
from .shell import CommandRunner, step

TEMPLATES_DIR = Path(__file__).parent / "templates"

RELEASE_SCRIPT = "scripts/release.mjs"
VERSION_SCRIPT = "scripts/update-version.mjs"
UTILS_DIR = "utils"


class ScaffoldOptions(BaseModel):
    """Flags from the command line.

    Attributes:
        force: Overwrite generated files that already exist.
        skip_readme: Do not write README.md.
    """

    force: bool = False
    skip_readme: bool = False


def load_template(name: str) -> str:
    return (TEMPLATES_DIR / name).read_text(encoding="utf-8")


def render_readme(meta: PackageMeta) -> str:
    """Fill the README template with package metadata."""
    rendered = load_template("README.md")
    replacements = {
        "__NAME__": meta.name,
        "__VERSION__": meta.version,
        "__DESCRIPTION__": meta.description,
        "__AUTHOR__": meta.author,
        "__LICENSE__": meta.license,
        "__CLI_COMMAND__": meta.cli_command,
    }
    for token, value in replacements.items():
        rendered = rendered.replace(token, value)
    return rendered


def render_release_script(settings: StarterSettings) -> str:
    """Fill the release script template with JavaScript literals from settings."""
    rendered = load_template("release.mjs")
    replacements = {
        "__TAG_PREFIX__": settings.tag_prefix,
        "__COMMIT_MESSAGE__": settings.release_commit_message,
        "__DIRTY_COMMIT_MESSAGE__": settings.dirty_commit_message,
        "__STASH_MESSAGE__": settings.stash_message,
        "__BUILD_SCRIPT__": settings.build_script,
        "__PUBLISH_ARGS__": settings.publish_args,
    }
    for token, value in replacements.items():
        rendered = rendered.replace(token, json.dumps(value, ensure_ascii=False))
    return rendered


class ScaffoldDriver:
    """Lay down the starter files and package.json fields.

    Attributes:
        report: Outcome of every file write, keyed by relative path.
    """

    def __init__(
        self,
        runner: CommandRunner,
        editor: DescriptorEditor,
        writer: ScaffoldWriter,
        settings: StarterSettings | None = None,
        options: ScaffoldOptions | None = None,
    ) -> None:
        self.runner = runner
        self.editor = editor
        self.writer = writer
        self.settings = settings or StarterSettings()
        self.options = options or ScaffoldOptions()
        self.report: dict[str, WriteOutcome] = {}

    def _write(self, relative_path: str, content: str) -> WriteOutcome:
        outcome = self.writer.write(
            relative_path, content, overwrite=self.options.force
        )
        self.report[relative_path] = outcome
        return outcome

    def ensure_descriptor(self) -> bool:
        """Run ``npm init`` if package.json is missing. Returns True if it ran."""
        if self.editor.exists():
            return False

        step("Initializing package.json")
        click.echo("No package.json found. Running `npm init` to create one.")
        click.echo("This step is interactive: answer the prompts, or press Ctrl+C")
        click.echo("and run `npm init -y` yourself.\n")
        self.runner.run_interactive("npm", "init")

        dev_dependencies = self.settings.dev_dependencies
        if dev_dependencies:
            self.runner.run_interactive("npm", "install", "-D", *dev_dependencies)
        return True

    def ensure_config_files(self) -> None:
        self._write("tsconfig.json", load_template("tsconfig.json"))
        self._write(".gitignore", load_template("gitignore"))
        self._write(".npmignore", "")

    def ensure_entry(self) -> None:
        self._write(self.settings.entry, load_template("index.ts"))

    def ensure_utils(self) -> None:
        self.writer.ensure_directory(UTILS_DIR)
        self._write(f"{UTILS_DIR}/utils.ts", load_template("utils.ts"))

    def ensure_readme(self) -> None:
        if self.options.skip_readme:
            click.echo("Skipping README.md (per --skip-readme).")
            return
        self._write("README.md", render_readme(package_meta(self.editor.load())))

    def ensure_release_scripts(self) -> None:
        self._write(RELEASE_SCRIPT, render_release_script(self.settings))
        self._write(VERSION_SCRIPT, load_template("update-version.mjs"))

    def ensure_package_defaults(self) -> None:
        """Merge type, main, bin and default scripts into package.json."""
        meta = package_meta(self.editor.load())
        self.editor.edit(
            ensure_package_fields(
                entry=self.settings.entry,
                command=meta.cli_command,
                module_type=self.settings.module_type,
                scripts={**DEFAULT_SCRIPTS, **self.settings.default_scripts},
            )
        )
        click.secho("Updated package.json fields", fg="green")

    def install_dependencies(self) -> None:
        step("Installing dependencies")
        self.runner.run_interactive("npm", "install")

    def run(self) -> dict[str, WriteOutcome]:
        """Execute every scaffold step in order and return the write report."""
        self.ensure_descriptor()

        step("Writing starter files")
        self.ensure_config_files()
        self.ensure_entry()
        self.ensure_utils()
        self.ensure_readme()
        self.ensure_release_scripts()
        self.ensure_package_defaults()

        self.install_dependencies()
        return dict(self.report)
