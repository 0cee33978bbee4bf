"""Compose the validation and release pipelines for one library.

Both pipelines share the same build steps. The release pipeline appends
version extraction, publish, tag and GitHub release steps.

Pipeline names:
    <name>-pull     pull requests touching <name>/**
    <name>-release  pushes to the main branch touching <name>/**,
                    ignoring changes to <name>/package-lock.json alone
"""

from winglib_generator.helpers.workspace_config import CISettings

from .artifacts import SubLibrary
from .pipeline_model import (
    Expr,
    OutputBinding,
    PipelineDefinition,
    Permission,
    SecretRef,
    Step,
    Trigger,
    TriggerEvent,
    export_command,
)

VERSION_BINDING = OutputBinding("WINGLIB_VERSION")

PACKED_TARBALL_GLOB = "*.tgz"

STEP_CHECKOUT = "Checkout"
STEP_SETUP_NODE = "Setup Node.js"
STEP_INSTALL_WING = "Install winglang"
STEP_INSTALL_DEPS = "Install dependencies"
STEP_TEST = "Test"
STEP_PACK = "Pack"
STEP_GET_VERSION = "Get package version"
STEP_ECHO_VERSION = f"Echo {VERSION_BINDING.name}"
STEP_PUBLISH = "Publish"
STEP_TAG = "Tag commit"
STEP_RELEASE = "Github release"


def pull_pipeline_name(library: SubLibrary) -> str:
    return f"{library.name}-pull"


def release_pipeline_name(library: SubLibrary) -> str:
    return f"{library.name}-release"


def _job_id(library: SubLibrary) -> str:
    return f"build-{library.name}"


def _build_steps(library: SubLibrary, ci: CISettings) -> list[Step]:
    """Checkout through pack, shared by both pipelines."""
    workdir = library.name
    return [
        Step(
            STEP_CHECKOUT,
            uses=ci.checkout_action,
            with_={"sparse-checkout": library.name},
        ),
        Step(
            STEP_SETUP_NODE,
            uses=ci.setup_node_action,
            with_={
                "node-version": ci.node_version,
                "registry-url": ci.registry_url,
            },
        ),
        Step(STEP_INSTALL_WING, run="npm i -g winglang"),
        Step(STEP_INSTALL_DEPS, run="npm i --include=dev", working_directory=workdir),
        Step(STEP_TEST, run="wing test", working_directory=workdir),
        Step(STEP_PACK, run="wing pack", working_directory=workdir),
    ]


def _release_tag(library: SubLibrary) -> Expr:
    return Expr.of(f"{library.name}-v", VERSION_BINDING.expr())


def _publish_steps(library: SubLibrary, ci: CISettings) -> list[Step]:
    workdir = library.name
    return [
        Step(
            STEP_GET_VERSION,
            run=export_command(
                VERSION_BINDING, "node -p \"require('./package.json').version\""
            ),
            working_directory=workdir,
            outputs=(VERSION_BINDING,),
        ),
        Step(STEP_ECHO_VERSION, run=Expr.of("echo ", VERSION_BINDING.shell())),
        Step(
            STEP_PUBLISH,
            run=(
                "npm publish --access=public "
                + f"--registry {ci.registry_url} --tag latest {PACKED_TARBALL_GLOB}"
            ),
            working_directory=workdir,
            env={"NODE_AUTH_TOKEN": Expr.of(SecretRef(ci.npm_token_secret))},
        ),
        Step(
            STEP_TAG,
            uses=ci.tagger_action,
            with_={
                "repo-token": Expr.of(SecretRef(ci.github_token_secret)),
                "tag": _release_tag(library),
            },
        ),
        Step(
            STEP_RELEASE,
            uses=ci.release_action,
            with_={
                "name": Expr.of(f"{library.name} v", VERSION_BINDING.expr()),
                "tag_name": _release_tag(library),
                "files": f"{library.name}/{PACKED_TARBALL_GLOB}",
                "token": Expr.of(SecretRef(ci.github_token_secret)),
            },
        ),
    ]


def compose_validation(library: SubLibrary, ci: CISettings) -> PipelineDefinition:
    """Pull-request pipeline: read-only build and test of one library."""
    return PipelineDefinition(
        name=pull_pipeline_name(library),
        trigger=Trigger(
            TriggerEvent.PULL_REQUEST,
            paths=(library.path_glob,),
        ),
        permission=Permission.NONE,
        job_id=_job_id(library),
        runs_on=ci.runs_on,
        steps=tuple(_build_steps(library, ci)),
    )


def compose_release(library: SubLibrary, ci: CISettings) -> PipelineDefinition:
    """Main-branch pipeline: build, publish to npm, tag and release."""
    return PipelineDefinition(
        name=release_pipeline_name(library),
        trigger=Trigger(
            TriggerEvent.PUSH,
            paths=(library.path_glob, f"!{library.lock_file}"),
            branches=(ci.main_branch,),
        ),
        permission=Permission.WRITE,
        job_id=_job_id(library),
        runs_on=ci.runs_on,
        steps=tuple(_build_steps(library, ci) + _publish_steps(library, ci)),
    )
