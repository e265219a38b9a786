"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from node_starter.models import Workspace
from tests.fakes import write_descriptor


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    return Workspace(root=tmp_path)


@pytest.fixture
def package_json(tmp_path: Path) -> Path:
    """Create a package.json as written by ``npm init -y``."""
    return write_descriptor(
        tmp_path,
        {
            "name": "demo-tool",
            "version": "1.2.3",
            "description": "A demo tool",
            "main": "index.js",
            "scripts": {"test": "vitest"},
            "keywords": ["demo"],
            "author": "Ada Lovelace",
            "license": "ISC",
        },
    )
