"""The umbrella workspace every library is generated into.

The workspace owns the root directory, the loaded configuration and the
shared CI integration point. Libraries register themselves here; workflow
files are written by ``synth`` once all libraries are registered.
"""

from pathlib import Path

from winglib_generator.helpers.helpers_logging import print_info
from winglib_generator.helpers.workspace_config import (
    WorkspaceConfig,
    find_workspace_root,
    load_workspace_config,
)

from .artifacts import SubLibrary
from .ci_registry import CIIntegrationPoint, workflow_artifact
from .materializer import MaterializeOutcome, materialize


class Workspace:
    """Root of a multi-library repository."""

    def __init__(
        self,
        root: Path,
        config: WorkspaceConfig | None = None,
        ci: CIIntegrationPoint | None = None,
    ) -> None:
        self.root = root
        self.config = config if config is not None else WorkspaceConfig()
        self.ci = ci if ci is not None else CIIntegrationPoint()
        self._libraries: list[SubLibrary] = []

    @classmethod
    def load(cls, root: Path | None = None) -> "Workspace":
        """Open the workspace at ``root`` (or the nearest one above cwd)."""
        resolved = root.resolve() if root is not None else find_workspace_root()
        return cls(resolved, load_workspace_config(resolved))

    def register_library(self, library: SubLibrary) -> None:
        self._libraries.append(library)

    @property
    def libraries(self) -> tuple[SubLibrary, ...]:
        return tuple(self._libraries)

    def synth(self, *, dry_run: bool = False) -> dict[str, MaterializeOutcome]:
        """Write one workflow file per registered pipeline.

        Returns:
            Mapping of workflow path (relative to the root) to its outcome.
        """
        outcomes: dict[str, MaterializeOutcome] = {}
        pipelines = self.ci.pipelines()
        if pipelines:
            print_info(f"\nWriting {len(pipelines)} workflow(s)")
        for pipeline in pipelines:
            artifact = workflow_artifact(pipeline)
            outcomes[artifact.path.as_posix()] = materialize(
                self.root,
                artifact,
                display_root=self.root,
                dry_run=dry_run,
            )
        return outcomes
