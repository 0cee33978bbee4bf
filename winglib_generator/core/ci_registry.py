"""Shared CI integration point and GitHub Actions rendering.

Libraries only append pipelines here. The workspace reads the registry once,
when it writes ``.github/workflows/<pipeline>.yml`` files.
"""

from pathlib import PurePosixPath

from winglib_generator.helpers.yaml_loader import dump_yaml_string

from .artifacts import GeneratedArtifact, WritePolicy
from .errors import DuplicatePipelineError
from .pipeline_model import Permission, PipelineDefinition, Step, render_value

WORKFLOWS_DIR = PurePosixPath(".github") / "workflows"

GENERATED_HEADER = (
    "# ~~ Generated by winglib-generator. To modify, edit winglibs.yaml "
    + "and run `winglib generate`."
)


class CIIntegrationPoint:
    """Append-only registry of pipeline definitions across all libraries."""

    def __init__(self) -> None:
        self._pipelines: list[PipelineDefinition] = []
        self._names: set[str] = set()

    def register(self, pipeline: PipelineDefinition) -> None:
        """Add ``pipeline`` to the registry.

        Raises:
            DuplicatePipelineError: If a pipeline with the same name exists.
        """
        if pipeline.name in self._names:
            raise DuplicatePipelineError(pipeline.name)
        self._names.add(pipeline.name)
        self._pipelines.append(pipeline)

    def __len__(self) -> int:
        return len(self._pipelines)

    def pipelines(self) -> tuple[PipelineDefinition, ...]:
        return tuple(self._pipelines)


def _render_trigger(pipeline: PipelineDefinition) -> dict[str, object]:
    trigger = pipeline.trigger
    clause: dict[str, object] = {}
    if trigger.branches:
        clause["branches"] = list(trigger.branches)
    if trigger.paths:
        clause["paths"] = list(trigger.paths)
    return {trigger.event.value: clause}


def _render_permissions(permission: Permission) -> dict[str, str]:
    if permission is Permission.WRITE:
        return {"contents": "write"}
    return {}


def _render_step(step: Step) -> dict[str, object]:
    rendered: dict[str, object] = {"name": step.name}
    if step.uses is not None:
        rendered["uses"] = step.uses
    if step.with_:
        rendered["with"] = {key: render_value(value) for key, value in step.with_.items()}
    if step.run is not None:
        rendered["run"] = render_value(step.run)
    if step.working_directory is not None:
        rendered["working-directory"] = step.working_directory
    if step.env:
        rendered["env"] = {key: render_value(value) for key, value in step.env.items()}
    return rendered


def render_workflow(pipeline: PipelineDefinition) -> dict[str, object]:
    """Convert a pipeline into a GitHub Actions workflow document."""
    return {
        "name": pipeline.name,
        "on": _render_trigger(pipeline),
        "jobs": {
            pipeline.job_id: {
                "runs-on": pipeline.runs_on,
                "permissions": _render_permissions(pipeline.permission),
                "steps": [_render_step(step) for step in pipeline.steps],
            },
        },
    }


def workflow_path(pipeline: PipelineDefinition) -> PurePosixPath:
    return WORKFLOWS_DIR / f"{pipeline.name}.yml"


def workflow_artifact(pipeline: PipelineDefinition) -> GeneratedArtifact:
    """Workflow file for ``pipeline``, relative to the workspace root."""
    body = dump_yaml_string(render_workflow(pipeline)).rstrip("\n")
    lines = (GENERATED_HEADER, "", *body.split("\n"))
    return GeneratedArtifact(workflow_path(pipeline), lines, WritePolicy.WRITE_ALWAYS)
