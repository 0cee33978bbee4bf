"""End-to-end tests for ``winglib generate`` and ``winglib list``.

Coverage matrix
---------------
- Names from the command line and from winglibs.yaml
- ``--root`` pointing at another directory
- Re-run keeps hand-edited stubs
- ``--dry-run`` writes nothing
- ``--keep-going`` versus fail-fast exit codes
- Config errors reported without traceback
- ``list`` and ``help`` output
"""

import json
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

RunWinglib = Callable[..., subprocess.CompletedProcess[str]]

pytestmark = pytest.mark.cli

CONFIG = "libraries:\n  - dynamodb\n  - checks\nnpm_scope: winglibs\n"


def _write_config(root: Path, text: str = CONFIG) -> None:
    (root / "winglibs.yaml").write_text(text, encoding="utf-8")


def _assert_files_exist(project_root: Path, files: list[str]) -> None:
    for file_path in files:
        assert (project_root / file_path).is_file(), f"File missing: {file_path}"


class TestGenerate:

    def test_generate_named_library(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        result = run_winglib("generate", "checks")

        assert result.returncode == 0, result.stderr
        _assert_files_exist(isolated_project, [
            "checks/package.json",
            "checks/LICENSE",
            "checks/README.md",
            "checks/checks.w",
            "checks/tests/checks.test.w",
            ".github/workflows/checks-pull.yml",
            ".github/workflows/checks-release.yml",
        ])
        assert "1 library(ies), 5 created, 0 updated, 0 skipped, 2 workflow(s)" in result.stdout
        assert "Generation complete" in result.stdout

    def test_generate_from_config(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        _write_config(isolated_project)

        result = run_winglib("generate")

        assert result.returncode == 0, result.stderr
        manifest = json.loads((isolated_project / "dynamodb" / "package.json").read_text())
        assert manifest["name"] == "@winglibs/dynamodb"
        assert (isolated_project / "checks" / "checks.w").is_file()
        assert "4 workflow(s)" in result.stdout

    def test_root_option(self, run_winglib: RunWinglib, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere"
        target.mkdir()

        result = run_winglib("generate", "dynamodb", "--root", str(target))

        assert result.returncode == 0, result.stderr
        assert (target / "dynamodb" / "package.json").is_file()
        assert (target / ".github" / "workflows" / "dynamodb-release.yml").is_file()

    def test_rerun_skips_stubs(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        run_winglib("generate", "checks")
        stub = isolated_project / "checks" / "checks.w"
        stub.write_text("// mine\n")

        result = run_winglib("generate", "checks")

        assert result.returncode == 0
        assert stub.read_text() == "// mine\n"
        assert "0 created, 3 updated, 2 skipped" in result.stdout
        assert "Skipped (exists): checks/checks.w" in result.stdout

    def test_dry_run(self, run_winglib: RunWinglib, isolated_project: Path) -> None:
        result = run_winglib("generate", "checks", "--dry-run")

        assert result.returncode == 0
        assert list(isolated_project.iterdir()) == []
        assert "Would create: checks/package.json" in result.stdout
        assert "Dry run: 1 library(ies)" in result.stdout


class TestGenerateFailures:

    def test_invalid_name_fails_fast(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        result = run_winglib("generate", "Bad", "checks")

        assert result.returncode == 1
        assert "Invalid library name 'Bad'" in result.stderr
        assert not (isolated_project / "checks").exists()
        assert not (isolated_project / ".github").exists()

    def test_invalid_later_name_writes_nothing(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        result = run_winglib("generate", "dynamodb", "Bad")

        assert result.returncode == 1
        assert "Invalid library name 'Bad'" in result.stderr
        assert not (isolated_project / "dynamodb").exists()
        assert not (isolated_project / ".github").exists()

    def test_write_failure_keeps_earlier_workflows(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        (isolated_project / "checks").write_text("")

        result = run_winglib("generate", "dynamodb", "checks")

        assert result.returncode == 1
        assert "Failed to write" in result.stderr
        assert (isolated_project / ".github" / "workflows" / "dynamodb-pull.yml").is_file()
        assert (isolated_project / ".github" / "workflows" / "dynamodb-release.yml").is_file()

    def test_keep_going_generates_the_rest(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        result = run_winglib("generate", "Bad", "checks", "--keep-going")

        assert result.returncode == 1
        assert (isolated_project / "checks" / "package.json").is_file()
        assert (isolated_project / ".github" / "workflows" / "checks-pull.yml").is_file()
        assert "Bad:" in result.stderr

    def test_invalid_config_reported(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        _write_config(isolated_project, "libraries: dynamodb\n")

        result = run_winglib("generate")

        assert result.returncode == 1
        assert "'libraries' must be a list of strings" in result.stderr

    def test_unknown_option_is_usage_error(self, run_winglib: RunWinglib) -> None:
        result = run_winglib("generate", "--bogus")

        assert result.returncode == 2
        assert "No such option" in result.stderr


class TestListAndHelp:

    def test_list_prints_configured_libraries(
        self, run_winglib: RunWinglib, isolated_project: Path,
    ) -> None:
        _write_config(isolated_project)

        result = run_winglib("list")

        assert result.returncode == 0
        assert result.stdout.splitlines() == ["dynamodb", "checks"]

    def test_list_without_config_warns(self, run_winglib: RunWinglib) -> None:
        result = run_winglib("list")

        assert result.returncode == 0
        assert "No libraries listed" in result.stdout

    @pytest.mark.parametrize("args", [(), ("help",)])
    def test_help(self, run_winglib: RunWinglib, args: tuple[str, ...]) -> None:
        result = run_winglib(*args)

        assert result.returncode == 0
        assert "Usage: winglib <command> [options]" in result.stdout
        assert "generate [NAMES...]" in result.stdout


class TestInstalledEntryPoint:

    def test_generate_via_executable(
        self, run_winglib_process: RunWinglib, isolated_project: Path,
    ) -> None:
        result = run_winglib_process("generate", "checks")

        assert result.returncode == 0, result.stderr
        assert (isolated_project / "checks" / "package.json").is_file()
