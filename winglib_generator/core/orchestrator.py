"""Scaffold orchestrator: generate every requested library in order.

For each name:
    1. validate the name
    2. compose the pull and release pipelines (ordering is checked here)
    3. build and materialize package.json, LICENSE, README.md and the stubs
    4. register the SubLibrary with the workspace and both pipelines with
       the CI integration point

Without ``keep_going`` every name is validated before anything is written,
and the first failure stops the run. With ``keep_going`` a failure is
recorded in the report and the next library is generated. Libraries that
were already generated are never rolled back, and their workflows are
written even when a later library fails.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from winglib_generator.helpers.helpers_logging import (
    print_error,
    print_header,
    print_warning,
)

from .artifacts import SubLibrary
from .content_builders import build_artifacts
from .errors import WinglibGeneratorError
from .identifiers import (
    validate_identifier,
    validate_identifiers,
    validate_new_identifier,
)
from .materializer import MaterializeOutcome, materialize
from .pipeline_composer import compose_release, compose_validation
from .workspace import Workspace


@dataclass
class LibraryResult:
    """What happened to one library's files."""

    name: str
    outcomes: dict[str, MaterializeOutcome] = field(default_factory=dict)
    pipelines: tuple[str, ...] = ()

    def paths_with(self, outcome: MaterializeOutcome) -> list[str]:
        return [path for path, result in self.outcomes.items() if result is outcome]


@dataclass
class GenerationReport:
    libraries: list[LibraryResult] = field(default_factory=list)
    failures: list[tuple[str, WinglibGeneratorError]] = field(default_factory=list)
    workflows: dict[str, MaterializeOutcome] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def library(self, name: str) -> LibraryResult:
        """Return the result for ``name``.

        Raises:
            KeyError: If ``name`` was not generated.
        """
        for result in self.libraries:
            if result.name == name:
                return result
        raise KeyError(name)


def generate_library(
    workspace: Workspace,
    name: str,
    *,
    dry_run: bool = False,
) -> LibraryResult:
    """Generate one library into ``workspace``.

    Raises:
        InvalidIdentifierError: Before anything is written, if ``name`` is invalid.
        MaterializationError: If a file cannot be written.
    """
    validate_identifier(name)
    library = SubLibrary(name, workspace)
    ci_settings = workspace.config.ci
    validation = compose_validation(library, ci_settings)
    release = compose_release(library, ci_settings)

    result = LibraryResult(name)
    for artifact in build_artifacts(name, workspace.config):
        result.outcomes[artifact.path.as_posix()] = materialize(
            library.outdir,
            artifact,
            library=name,
            display_root=workspace.root,
            dry_run=dry_run,
        )

    workspace.register_library(library)
    workspace.ci.register(validation)
    workspace.ci.register(release)
    result.pipelines = (validation.name, release.name)
    return result


def generate(
    workspace: Workspace,
    names: Iterable[str],
    *,
    keep_going: bool = False,
    dry_run: bool = False,
) -> GenerationReport:
    """Generate every library in ``names``, in the given order.

    Raises:
        InvalidIdentifierError: Before anything is written, if any name is
            invalid or repeated and ``keep_going`` is not set.
        WinglibGeneratorError: The first failure, unless ``keep_going`` is set.
    """
    selected = list(names)
    if not keep_going:
        validate_identifiers(selected)

    report = GenerationReport()
    seen: set[str] = set()

    for name in selected:
        print_header(f"\n📦 {name or '<empty>'}")
        try:
            validate_new_identifier(name, seen)
            report.libraries.append(generate_library(workspace, name, dry_run=dry_run))
        except WinglibGeneratorError as exc:
            if not keep_going:
                raise
            print_error(str(exc))
            report.failures.append((name, exc))

    return report


def generate_workspace(
    root: Path | None = None,
    names: Iterable[str] | None = None,
    *,
    keep_going: bool = False,
    dry_run: bool = False,
) -> GenerationReport:
    """Load the workspace, generate libraries and write their workflows.

    Args:
        root: Workspace root. Defaults to the nearest directory above the
            current one holding winglibs.yaml.
        names: Libraries to generate. Defaults to ``libraries`` from
            winglibs.yaml.
        keep_going: Continue with the next library after a failure.
        dry_run: Report what would change without writing anything.
    """
    workspace = Workspace.load(root)
    selected = list(names) if names else list(workspace.config.libraries)
    if not selected:
        print_warning("No libraries to generate (pass names or list them in winglibs.yaml)")

    try:
        report = generate(workspace, selected, keep_going=keep_going, dry_run=dry_run)
    except WinglibGeneratorError:
        # Libraries finished before the failure still get their workflows
        workspace.synth(dry_run=dry_run)
        raise
    report.workflows = workspace.synth(dry_run=dry_run)
    return report
