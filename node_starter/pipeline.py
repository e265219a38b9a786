"""Release pipeline: check tree → bump → build → commit → tag → push → publish.

This module orchestrates the node-starter release process:
1. Ask for the release kind and validate it before touching anything
2. Check the working tree; if dirty, commit, stash or abort
3. Bump the version in package.json
4. Run the build script so the build embeds the new version
5. Commit, tag, push with tags, and npm publish
6. Offer to pop the stash created in step 2

Every failure is fatal. Nothing is retried or rolled back: a failed push
after a successful commit and tag leaves the local repository ahead of the
remote for the user to resolve.
"""

from __future__ import annotations

import click

from .config import StarterSettings
from .descriptor import DescriptorEditor, set_version
from .errors import AbortedDirtyTree, InvalidChoice
from .models import ReleaseReport, ReleaseState, VersionBump
from .prompts import Prompter
from .shell import CommandRunner, step
from .versions import DEFAULT_VERSION, ReleaseKind, bump_version

DIRTY_TREE_CHOICES = {"c": "commit", "s": "stash", "a": "abort"}


def bump_descriptor_version(
    editor: DescriptorEditor, kind: str | ReleaseKind
) -> VersionBump:
    """Bump the version in package.json and return the old and new values.

    The kind is validated before the file is read or written.
    """
    release_kind = ReleaseKind.parse(kind)
    old = editor.load().version or DEFAULT_VERSION
    new = bump_version(old, release_kind)
    editor.edit(set_version(new))
    return VersionBump(old=old, new=new)


class ReleasePipeline:
    """Drive one release from a possibly dirty working tree to npm.

    Attributes:
        states: Phases visited so far, in order.
    """

    def __init__(
        self,
        runner: CommandRunner,
        editor: DescriptorEditor,
        prompter: Prompter,
        settings: StarterSettings | None = None,
    ) -> None:
        self.runner = runner
        self.editor = editor
        self.prompter = prompter
        self.settings = settings or StarterSettings()
        self.states: list[ReleaseState] = []

    def _enter(self, state: ReleaseState, header: str | None = None) -> None:
        self.states.append(state)
        if header:
            step(header)

    def git(self, *args: str) -> str:
        return self.runner.run_captured("git", *args).stdout

    def resolve_kind(self, kind: str | None = None) -> ReleaseKind:
        """Ask for the release kind unless given. An empty answer means patch."""
        if kind is None:
            kind = self.prompter.ask("Release type? (patch/minor/major)", "patch")
        return ReleaseKind.parse(kind.strip() or ReleaseKind.PATCH.value)

    def check_tree(self) -> list[str]:
        """Return the pending changes reported by ``git status --porcelain``."""
        self._enter(ReleaseState.CHECKING_TREE, "Checking working tree")
        status = self.git("status", "--porcelain")
        return [line for line in status.splitlines() if line.strip()]

    def resolve_dirty_tree(self, changes: list[str]) -> bool:
        """Commit, stash or abort pending changes.

        Returns:
            True if the changes were stashed.

        Raises:
            AbortedDirtyTree: If the user chose to abort.
            InvalidChoice: If the answer is not commit, stash or abort.
        """
        self._enter(ReleaseState.AWAITING_USER_CHOICE)
        click.secho("Working tree has uncommitted changes:", fg="yellow")
        for line in changes:
            click.echo(f"  {line}")

        answer = self.prompter.ask("(c)ommit/(s)tash/(a)bort", "a")
        normalized = answer.strip().lower() or "a"
        choice = DIRTY_TREE_CHOICES.get(normalized[:1])
        if choice is None or not choice.startswith(normalized):
            raise InvalidChoice(answer, list(DIRTY_TREE_CHOICES.values()))

        if choice == "abort":
            raise AbortedDirtyTree()

        if choice == "commit":
            message = self.prompter.ask(
                "Commit message", self.settings.dirty_commit_message
            )
            self.git("add", "-A")
            self.git("commit", "-m", message or self.settings.dirty_commit_message)
            click.echo("  Committed pending changes")
            return False

        self.git(
            "stash", "push", "--include-untracked", "-m", self.settings.stash_message
        )
        click.echo(f"  Stashed pending changes ({self.settings.stash_message})")
        return True

    def bump(self, kind: ReleaseKind) -> VersionBump:
        self._enter(ReleaseState.BUMPING, f"Bumping {kind.value} version")
        bump = bump_descriptor_version(self.editor, kind)
        click.echo(f"  {bump.old} → {bump.new}")
        return bump

    def build(self) -> None:
        script = self.settings.build_script
        self._enter(ReleaseState.BUILDING, f"Running npm run {script}")
        self.runner.run_interactive("npm", "run", script)

    def commit(self, version: str) -> None:
        self._enter(ReleaseState.COMMITTING, "Committing release")
        self.git("add", "-A")
        self.git("commit", "-m", self.settings.release_message(version))

    def tag(self, version: str) -> str:
        self._enter(ReleaseState.TAGGING)
        tag = self.settings.tag_name(version)
        message = self.settings.release_message(version)
        # --follow-tags only pushes annotated tags.
        self.git("tag", "-a", tag, "-m", message)
        click.echo(f"  {tag}")
        return tag

    def push(self) -> None:
        self._enter(ReleaseState.PUSHING, "Pushing commits and tags")
        self.runner.run_interactive("git", "push", "--follow-tags")

    def publish(self) -> None:
        self._enter(ReleaseState.PUBLISHING, "Publishing to npm")
        self.runner.run_interactive("npm", "publish", *self.settings.publish_args)

    def offer_unstash(self) -> bool:
        """Ask whether to pop the pre-release stash. Returns True if popped."""
        self._enter(ReleaseState.OFFERING_UNSTASH)
        if not self.prompter.confirm("Pop stash now?", default=False):
            click.echo("  Stash kept. Run `git stash pop` when ready.")
            return False
        self.runner.run_interactive("git", "stash", "pop")
        return True

    def run(self, kind: str | None = None) -> ReleaseReport:
        """Execute the full release.

        Args:
            kind: patch, minor or major. Prompted for when omitted.

        Raises:
            InvalidReleaseKind: Before any file or command is touched.
            AbortedDirtyTree: If the user aborts on a dirty tree.
            CommandFailed: If any git or npm step exits non-zero.
        """
        release_kind = self.resolve_kind(kind)
        # Fail on a broken package.json before changing the working tree.
        self.editor.load()

        stashed = False
        changes = self.check_tree()
        if changes:
            stashed = self.resolve_dirty_tree(changes)
        self._enter(ReleaseState.CLEAN)

        bump = self.bump(release_kind)
        self.build()
        self.commit(bump.new)
        tag = self.tag(bump.new)
        self.push()
        self.publish()

        popped = self.offer_unstash() if stashed else False
        self._enter(ReleaseState.DONE)
        click.echo(f"\n{'=' * 60}\nReleased {tag}\n{'=' * 60}")

        return ReleaseReport(
            kind=release_kind.value,
            bump=bump,
            tag=tag,
            stashed=stashed,
            stash_popped=popped,
            states=list(self.states),
        )
