"""Settings read from an optional node-starter.toml in the project root.

Uses tomlkit so the file may carry comments and arbitrary formatting; every
key is optional and an absent file means all defaults.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tomlkit.exceptions import TOMLKitError

from .errors import ConfigError

CONFIG_FILENAME = "node-starter.toml"


class StarterSettings(BaseModel):
    """Tunable defaults for scaffolding and releasing.

    Attributes:
        entry: Entry module written by init and registered as main/bin.
        module_type: Value for the package.json "type" field.
        tag_prefix: Prefix for release tags (tag is prefix + version).
        release_commit_message: Release commit message; "{version}" is
            replaced with the new version.
        dirty_commit_message: Default message when committing pending work
            before a release.
        stash_message: Label of the stash created before a release.
        build_script: npm script run before committing the release.
        dev_dependencies: Installed with "npm install -D" after npm init.
        publish_args: Extra arguments for "npm publish".
        default_scripts: package.json scripts merged over the built-in
            defaults.
    """

    model_config = ConfigDict(extra="forbid")

    entry: str = "index.ts"
    module_type: str = "module"
    tag_prefix: str = "v"
    release_commit_message: str = "chore(release): {version}"
    dirty_commit_message: str = "chore: commit pending changes before release"
    stash_message: str = "node-starter: pre-release stash"
    build_script: str = "prepare"
    dev_dependencies: list[str] = Field(
        default_factory=lambda: ["typescript", "ts-node", "@types/node"]
    )
    publish_args: list[str] = Field(default_factory=list)
    default_scripts: dict[str, str] = Field(default_factory=dict)

    def release_message(self, version: str) -> str:
        return self.release_commit_message.replace("{version}", version)

    def tag_name(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"


def load_settings(root: Path) -> StarterSettings:
    """Load node-starter.toml from ``root``, or defaults if it is absent.

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or holds
            unknown keys or values of the wrong type.
    """
    path = root / CONFIG_FILENAME
    if not path.exists():
        return StarterSettings()

    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, TOMLKitError) as exc:
        raise ConfigError(f"Could not read {CONFIG_FILENAME}: {exc}") from exc

    try:
        return StarterSettings.model_validate(doc.unwrap())
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid {CONFIG_FILENAME}: {problems}") from exc
