"""Core scaffold generation logic."""

from winglib_generator.core.artifacts import GeneratedArtifact, SubLibrary, WritePolicy
from winglib_generator.core.errors import (
    ConfigError,
    DuplicatePipelineError,
    InvalidIdentifierError,
    MaterializationError,
    PipelineOrderingError,
    WinglibGeneratorError,
)

__all__ = [
    "ConfigError",
    "DuplicatePipelineError",
    "GeneratedArtifact",
    "InvalidIdentifierError",
    "MaterializationError",
    "PipelineOrderingError",
    "SubLibrary",
    "WinglibGeneratorError",
    "WritePolicy",
]
