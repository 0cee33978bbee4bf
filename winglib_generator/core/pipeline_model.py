"""Declarative model for CI pipelines.

A pipeline is an ordered list of steps. Values a step computes at run time
(for example the package version) are modelled as ``OutputBinding`` objects
instead of hand-written ``${{ env.X }}`` strings, so the pipeline can check
that every value is produced before it is read.

Example:
    version = OutputBinding("WINGLIB_VERSION")
    steps = (
        Step("Get package version", run=export_command(version, "node -p ..."),
             outputs=(version,)),
        Step("Tag commit", uses="tvdias/github-tagger@v0.0.1",
             with_={"tag": Expr.of("dynamodb-v", version.expr())}),
    )
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

from .errors import PipelineOrderingError

RefStyle = Literal["expression", "shell"]


@dataclass(frozen=True)
class OutputBinding:
    """A named value one step produces and later steps consume."""

    name: str

    def expr(self) -> "BindingRef":
        """Reference usable inside action inputs (``${{ env.NAME }}``)."""
        return BindingRef(self, "expression")

    def shell(self) -> "BindingRef":
        """Reference usable inside shell commands (``$NAME``)."""
        return BindingRef(self, "shell")


@dataclass(frozen=True)
class BindingRef:
    binding: OutputBinding
    style: RefStyle = "expression"

    def render(self) -> str:
        if self.style == "shell":
            return f"${self.binding.name}"
        return f"${{{{ env.{self.binding.name} }}}}"


@dataclass(frozen=True)
class SecretRef:
    """A credential supplied by the CI secret store."""

    name: str

    def render(self) -> str:
        return f"${{{{ secrets.{self.name} }}}}"


Part = Union[str, BindingRef, SecretRef]


@dataclass(frozen=True)
class Expr:
    """A string assembled from literal text and deferred references."""

    parts: tuple[Part, ...]

    @classmethod
    def of(cls, *parts: Part) -> "Expr":
        return cls(tuple(parts))

    def render(self) -> str:
        return "".join(part if isinstance(part, str) else part.render() for part in self.parts)

    def bindings(self) -> tuple[OutputBinding, ...]:
        return tuple(part.binding for part in self.parts if isinstance(part, BindingRef))


Value = Union[str, Expr]


def render_value(value: Value) -> str:
    return value if isinstance(value, str) else value.render()


def export_command(binding: OutputBinding, command: str) -> str:
    """Shell command publishing the output of ``command`` as ``binding``."""
    return f'echo {binding.name}=$({command}) >> "$GITHUB_ENV"'


@dataclass(frozen=True)
class Step:
    """One pipeline step.

    Exactly one of ``uses`` (an external action) or ``run`` (an inline
    command) must be set.
    """

    name: str
    uses: str | None = None
    run: Value | None = None
    working_directory: str | None = None
    with_: Mapping[str, Value] = field(default_factory=dict)
    env: Mapping[str, Value] = field(default_factory=dict)
    outputs: tuple[OutputBinding, ...] = ()

    def __post_init__(self) -> None:
        if (self.uses is None) == (self.run is None):
            raise ValueError(f"Step '{self.name}' needs exactly one of 'uses' or 'run'")

    def _values(self) -> Iterator[Value]:
        if self.run is not None:
            yield self.run
        yield from self.with_.values()
        yield from self.env.values()

    def consumes(self) -> tuple[OutputBinding, ...]:
        """Bindings referenced anywhere in this step, in first-use order."""
        seen: list[OutputBinding] = []
        for value in self._values():
            if isinstance(value, Expr):
                for binding in value.bindings():
                    if binding not in seen:
                        seen.append(binding)
        return tuple(seen)


class TriggerEvent(Enum):
    PULL_REQUEST = "pull_request"
    PUSH = "push"


@dataclass(frozen=True)
class Trigger:
    """When a pipeline runs.

    ``paths`` uses GitHub filter syntax; entries starting with ``!`` exclude.
    """

    event: TriggerEvent
    paths: tuple[str, ...] = ()
    branches: tuple[str, ...] = ()

    @property
    def included_paths(self) -> tuple[str, ...]:
        return tuple(p for p in self.paths if not p.startswith("!"))

    @property
    def excluded_paths(self) -> tuple[str, ...]:
        return tuple(p[1:] for p in self.paths if p.startswith("!"))


class Permission(Enum):
    NONE = "none"
    WRITE = "write"


def check_step_order(pipeline: str, steps: tuple[Step, ...]) -> None:
    """Ensure every consumed binding is produced by a strictly earlier step.

    Raises:
        PipelineOrderingError: On the first step reading an unavailable value.
    """
    produced: set[OutputBinding] = set()
    for step in steps:
        for binding in step.consumes():
            if binding not in produced:
                raise PipelineOrderingError(pipeline, step.name, binding.name)
        produced.update(step.outputs)


@dataclass(frozen=True)
class PipelineDefinition:
    """A complete single-job workflow."""

    name: str
    trigger: Trigger
    permission: Permission
    job_id: str
    runs_on: str
    steps: tuple[Step, ...]

    def __post_init__(self) -> None:
        check_step_order(self.name, self.steps)

    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]

    def index_of(self, step_name: str) -> int:
        """Position of the step called ``step_name``.

        Raises:
            KeyError: If no step has that name.
        """
        for index, step in enumerate(self.steps):
            if step.name == step_name:
                return index
        raise KeyError(f"Pipeline '{self.name}' has no step '{step_name}'")

    def producer_of(self, binding: OutputBinding) -> Step | None:
        for step in self.steps:
            if binding in step.outputs:
                return step
        return None
