"""Data models for node-starter.

These Pydantic models represent the records passed between the scaffold
driver, the release pipeline, and the command runner.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

DESCRIPTOR_FILENAME = "package.json"


class Workspace(BaseModel):
    """The project directory every component operates on.

    Attributes:
        root: Directory holding package.json and the generated files.
        env: Extra environment variables for child processes, layered over
             the inherited environment. None means inherit unchanged.
    """

    root: Path
    env: dict[str, str] | None = None

    @property
    def descriptor_path(self) -> Path:
        return self.root / DESCRIPTOR_FILENAME


class Descriptor(BaseModel):
    """The fields of package.json that node-starter reads or merges.

    Unknown fields are kept as extras so a load/save round trip never drops
    anything. The key order of the loaded file is remembered and reused when
    the descriptor is written back.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | dict[str, Any] | None = None
    license: str | None = None
    bin: str | dict[str, str] | None = None
    scripts: dict[str, str] | None = None
    type: str | None = None
    main: str | None = None

    _key_order: list[str] = PrivateAttr(default_factory=list)

    @classmethod
    def from_json_dict(cls, data: dict[str, Any]) -> Descriptor:
        descriptor = cls.model_validate(data)
        descriptor._key_order = list(data)
        return descriptor

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize present fields, original keys first, new keys appended."""
        dumped = self.model_dump(mode="json")
        present = set(self.model_fields_set) | set(self.model_extra or {})
        ordered = [key for key in self._key_order if key in present]
        ordered += [key for key in dumped if key in present and key not in ordered]
        return {key: dumped[key] for key in ordered}


class PackageMeta(BaseModel):
    """Descriptor fields with display defaults, used to render README.md."""

    name: str
    version: str
    description: str
    author: str
    license: str
    cli_command: str


class CommandResult(BaseModel):
    """Outcome of a child process that exited with status 0.

    stdout and stderr are empty for interactive runs, whose streams go
    straight to the terminal.
    """

    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""


class VersionBump(BaseModel):
    """Records a version change written to package.json.

    Attributes:
        old: The version before bumping.
        new: The version after bumping.
    """

    old: str
    new: str


class WriteOutcome(str, enum.Enum):
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"


class ReleaseState(str, enum.Enum):
    """Phases of a release, in the order the pipeline visits them."""

    CHECKING_TREE = "checking-tree"
    AWAITING_USER_CHOICE = "awaiting-user-choice"
    CLEAN = "clean"
    BUMPING = "bumping"
    BUILDING = "building"
    COMMITTING = "committing"
    TAGGING = "tagging"
    PUSHING = "pushing"
    PUBLISHING = "publishing"
    OFFERING_UNSTASH = "offering-unstash"
    DONE = "done"


class ReleaseReport(BaseModel):
    """Summary of a completed release."""

    kind: str
    bump: VersionBump
    tag: str
    stashed: bool = False
    stash_popped: bool = False
    states: list[ReleaseState] = Field(default_factory=list)
