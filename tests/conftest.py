"""Shared fixtures for the generator test suite.

Provides a composable ``make_workspace_dir`` factory so tests can create an
isolated workspace root with an optional ``winglibs.yaml``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from winglib_generator.core.artifacts import SubLibrary
from winglib_generator.core.workspace import Workspace
from winglib_generator.helpers.workspace_config import WorkspaceConfig

# Default winglibs.yaml used by the factory.
DEFAULT_CONFIG = (
    "libraries:\n"
    "  - dynamodb\n"
    "  - checks\n"
    "npm_scope: winglibs\n"
    "repository_url: https://github.com/example/winglibs.git\n"
    "author:\n"
    "  name: Jane Doe\n"
    "  email: jane@example.com\n"
    "license:\n"
    "  owner: wing\n"
    "  period: 2023\n"
)

MakeWorkspaceDir = Callable[..., Path]


@pytest.fixture()
def make_workspace_dir(tmp_path: Path) -> MakeWorkspaceDir:
    """Return a factory creating ``tmp_path/<name>`` with a winglibs.yaml.

    Pass ``config=None`` to create a workspace without a config file.
    """

    def _make(name: str = "repo", config: str | None = DEFAULT_CONFIG) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        if config is not None:
            (root / "winglibs.yaml").write_text(config, encoding="utf-8")
        return root

    return _make


@pytest.fixture()
def workspace_dir(make_workspace_dir: MakeWorkspaceDir) -> Iterator[Path]:
    """Default workspace root, used as the working directory for the test."""
    root = make_workspace_dir()
    original_cwd = Path.cwd()
    os.chdir(root)
    try:
        yield root
    finally:
        os.chdir(original_cwd)


@pytest.fixture()
def workspace(tmp_path: Path) -> Workspace:
    """In-memory workspace rooted at ``tmp_path`` with default config."""
    return Workspace(tmp_path, WorkspaceConfig())


@pytest.fixture()
def dynamodb(workspace: Workspace) -> SubLibrary:
    return SubLibrary("dynamodb", workspace)
