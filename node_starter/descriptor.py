"""package.json reading, writing, and field merging.

Every change to package.json goes through DescriptorEditor.edit(), which
loads the file, applies a mutator, and writes it back with the original key
order and a trailing newline. Mutators only fill in fields that are absent,
so applying one twice gives the same file as applying it once.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from packaging.utils import canonicalize_name
from pydantic import ValidationError

from .errors import DescriptorReadError, DescriptorWriteError
from .models import Descriptor, PackageMeta, Workspace

Mutator = Callable[[Descriptor], "Descriptor | None"]

DEFAULT_SCRIPTS: dict[str, str] = {
    "clean": "rm -rf dist",
    "build": "tsc",
    "prepare": "npm run build",
    "prettier": "prettier --write .",
    "lint": "eslint .",
    "test": 'echo "Error: no test specified" && exit 1',
    "release": "node scripts/release.mjs",
    "bump": "node scripts/update-version.mjs",
}


class DescriptorEditor:
    """Load, mutate, and save a project's package.json."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def for_workspace(cls, workspace: Workspace) -> DescriptorEditor:
        return cls(workspace.descriptor_path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Descriptor:
        """Read and validate package.json.

        Raises:
            DescriptorReadError: If the file is missing, is not valid JSON,
                is not a JSON object, or has fields of the wrong type.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DescriptorReadError(
                f"Could not read {self.path.name}: {exc.strerror or exc}"
            ) from exc
        except UnicodeDecodeError as exc:
            raise DescriptorReadError(
                f"{self.path.name} is not valid UTF-8 text: {exc}"
            ) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DescriptorReadError(
                f"{self.path.name} is not valid JSON: {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise DescriptorReadError(f"{self.path.name} must contain a JSON object")

        try:
            return Descriptor.from_json_dict(data)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) for err in exc.errors()
            )
            raise DescriptorReadError(
                f"{self.path.name} has invalid fields: {fields}"
            ) from exc

    def save(self, descriptor: Descriptor) -> None:
        """Write package.json with two-space indent and a trailing newline.

        Raises:
            DescriptorWriteError: If the file cannot be written.
        """
        text = json.dumps(descriptor.to_json_dict(), indent=2, ensure_ascii=False)
        try:
            self.path.write_text(text + "\n", encoding="utf-8")
        except OSError as exc:
            raise DescriptorWriteError(
                f"Could not write {self.path.name}: {exc.strerror or exc}"
            ) from exc

    def edit(self, mutator: Mutator) -> Descriptor:
        """Load, apply ``mutator``, and save.

        The mutator may change the descriptor in place and return None, or
        return a replacement descriptor.
        """
        descriptor = self.load()
        result = mutator(descriptor)
        if result is not None:
            descriptor = result
        self.save(descriptor)
        return descriptor


def set_version(version: str) -> Mutator:
    def mutate(descriptor: Descriptor) -> None:
        descriptor.version = version

    return mutate


def ensure_package_fields(
    *,
    entry: str,
    command: str,
    module_type: str = "module",
    scripts: Mapping[str, str] | None = None,
) -> Mutator:
    """Build a mutator that fills in type, main, bin and scripts.

    Existing values are never replaced. A string ``bin`` is converted to the
    mapping form, keeping its path under ``command``.

    Args:
        entry: Entry module used for main and the bin target.
        command: CLI command name registered in bin.
        module_type: Default for the "type" field.
        scripts: Default npm scripts; DEFAULT_SCRIPTS when omitted.
    """
    defaults = dict(DEFAULT_SCRIPTS if scripts is None else scripts)

    def mutate(descriptor: Descriptor) -> None:
        if descriptor.type is None:
            descriptor.type = module_type
        if descriptor.main is None:
            descriptor.main = entry

        if descriptor.bin is None:
            descriptor.bin = {command: entry}
        elif isinstance(descriptor.bin, str):
            descriptor.bin = {command: descriptor.bin}
        elif command not in descriptor.bin:
            descriptor.bin[command] = entry

        merged = dict(descriptor.scripts or {})
        for name, script in defaults.items():
            merged.setdefault(name, script)
        if merged != descriptor.scripts:
            descriptor.scripts = merged

    return mutate


def command_from_package_name(name: str) -> str:
    """Derive a CLI command from an npm package name.

    Examples:
        "my-tool" → "my-tool"
        "@acme/My_Tool" → "my-tool"
    """
    unscoped = name.rsplit("/", 1)[-1]
    return canonicalize_name(unscoped) or name


def resolve_cli_command(bin_field: Any, name: str) -> str:
    """Return the first bin command, or a command derived from ``name``."""
    if isinstance(bin_field, Mapping) and bin_field:
        return next(iter(bin_field))
    return command_from_package_name(name)


def author_name(author: str | Mapping[str, Any] | None, fallback: str) -> str:
    if isinstance(author, str) and author:
        return author
    if isinstance(author, Mapping) and author.get("name"):
        return str(author["name"])
    return fallback


def package_meta(descriptor: Descriptor) -> PackageMeta:
    """Collect README metadata from a descriptor, filling display defaults."""
    name = descriptor.name or "my-package"
    return PackageMeta(
        name=name,
        version=descriptor.version or "0.1.0",
        description=descriptor.description or "Describe your package here.",
        author=author_name(descriptor.author, "Your Name"),
        license=descriptor.license or "MIT",
        cli_command=resolve_cli_command(descriptor.bin, name),
    )
