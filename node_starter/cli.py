"""CLI entry point for node-starter."""

from __future__ import annotations

from pathlib import Path

import click

from .config import load_settings
from .descriptor import DescriptorEditor
from .files import ScaffoldWriter
from .models import Workspace, WriteOutcome
from .pipeline import ReleasePipeline, bump_descriptor_version
from .prompts import ClickPrompter
from .scaffold import ScaffoldDriver, ScaffoldOptions
from .shell import CommandRunner

directory_option = click.option(
    "-C",
    "--directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Project directory to operate on.",
)


def _workspace(directory: Path) -> Workspace:
    return Workspace(root=directory.resolve())


@click.group()
@click.version_option(package_name="node-starter")
def cli() -> None:
    """Scaffold a TypeScript npm package and release it."""


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite generated files that exist.")
@click.option("--skip-readme", is_flag=True, help="Do not generate README.md.")
@directory_option
def init(force: bool, skip_readme: bool, directory: Path) -> None:
    """Create the starter layout in the project directory."""
    directory.mkdir(parents=True, exist_ok=True)
    workspace = _workspace(directory)
    settings = load_settings(workspace.root)

    driver = ScaffoldDriver(
        CommandRunner(workspace),
        DescriptorEditor.for_workspace(workspace),
        ScaffoldWriter(workspace.root),
        settings,
        ScaffoldOptions(force=force, skip_readme=skip_readme),
    )
    report = driver.run()

    written = sum(1 for o in report.values() if o is not WriteOutcome.SKIPPED)
    skipped = len(report) - written
    click.secho(
        f"\nNode.js package starter ready ({written} written, {skipped} skipped).",
        fg="green",
    )


@cli.command()
@click.option(
    "-k",
    "--kind",
    default=None,
    help="Release type: patch, minor or major. Prompted for when omitted.",
)
@directory_option
def release(kind: str | None, directory: Path) -> None:
    """Bump, build, commit, tag, push and publish a release."""
    workspace = _workspace(directory)
    pipeline = ReleasePipeline(
        CommandRunner(workspace),
        DescriptorEditor.for_workspace(workspace),
        ClickPrompter(),
        load_settings(workspace.root),
    )
    pipeline.run(kind)


@cli.command()
@click.argument("kind", default="patch")
@directory_option
def bump(kind: str, directory: Path) -> None:
    """Bump the package.json version without touching git or npm."""
    workspace = _workspace(directory)
    result = bump_descriptor_version(DescriptorEditor.for_workspace(workspace), kind)
    click.echo(f"package.json version bumped to {result.new}")
