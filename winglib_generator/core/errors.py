"""Exception hierarchy for the winglib generator.

Every error carries enough context (library name, artifact path, pipeline
name) for the caller to decide whether to abort the run or move on to the
next library.
"""

from pathlib import Path


class WinglibGeneratorError(Exception):
    """Base class for all generator errors."""


class InvalidIdentifierError(WinglibGeneratorError):
    """A sub-library name is empty, unsafe as a path segment, or repeated."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid library name {name!r}: {reason}")


class MaterializationError(WinglibGeneratorError):
    """Writing a generated file failed."""

    def __init__(
        self,
        path: Path,
        cause: OSError,
        library: str | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        self.library = library
        scope = f" for library '{library}'" if library else ""
        super().__init__(f"Failed to write {path}{scope}: {cause}")


class PipelineOrderingError(WinglibGeneratorError):
    """A step reads an output binding that no earlier step produces."""

    def __init__(self, pipeline: str, step: str, binding: str) -> None:
        self.pipeline = pipeline
        self.step = step
        self.binding = binding
        super().__init__(
            f"Pipeline '{pipeline}': step '{step}' consumes '{binding}' "
            + "before any earlier step produces it"
        )


class DuplicatePipelineError(WinglibGeneratorError):
    """A pipeline with the same name was already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Pipeline '{name}' is already registered")


class ConfigError(WinglibGeneratorError):
    """The workspace configuration file is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
