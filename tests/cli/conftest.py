"""Shared fixtures for end-to-end CLI tests.

Every CLI e2e test gets an isolated temporary directory to work in,
so tests never pollute each other or the real workspace.

``run_winglib`` calls ``commands.main`` in-process and captures its
output, so it works without the ``winglib`` entry point installed.
``run_winglib_process`` runs the installed ``winglib`` executable in a
subprocess and is skipped when the entry point is missing.
"""

import os
import shutil
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from winglib_generator.cli import commands

RunWinglib = Callable[..., subprocess.CompletedProcess[str]]

_WINGLIB_AVAILABLE = shutil.which("winglib") is not None
_SKIP_REASON_WINGLIB = "winglib entry point is not installed (run: pip install -e .)"


@pytest.fixture()
def isolated_project(tmp_path: Path) -> Iterator[Path]:
    """Create an isolated empty project directory and cd into it.

    Yields:
        Path to the temporary project root.
    """
    original_cwd = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture()
def run_winglib(
    isolated_project: Path,
    capsys: pytest.CaptureFixture[str],
) -> RunWinglib:
    """Return a helper that runs ``winglib <args>`` in-process.

    Usage in tests::

        def test_generate(run_winglib: RunWinglib) -> None:
            result = run_winglib("generate", "checks")
            assert result.returncode == 0
    """
    del isolated_project

    def _run(*args: str) -> subprocess.CompletedProcess[str]:
        capsys.readouterr()
        returncode = commands.main(list(args))
        captured = capsys.readouterr()
        return subprocess.CompletedProcess(
            args=["winglib", *args],
            returncode=returncode,
            stdout=captured.out,
            stderr=captured.err,
        )

    return _run


@pytest.fixture()
def run_winglib_process(isolated_project: Path) -> RunWinglib:
    """Return a helper that invokes the installed ``winglib`` executable."""
    if not _WINGLIB_AVAILABLE:
        pytest.skip(_SKIP_REASON_WINGLIB)

    def _run(*args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["winglib", *args],
            cwd=isolated_project,
            capture_output=True,
            text=True,
            check=False,
            env={**os.environ, "NO_COLOR": "1"},
        )

    return _run
