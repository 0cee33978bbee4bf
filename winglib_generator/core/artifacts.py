"""Data model shared by the builders, the materializer and the orchestrator."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .workspace import Workspace


class WritePolicy(Enum):
    """What happens when a generated file already exists on disk.

    WRITE_ONCE files are handed over to the developer after the first run.
    WRITE_ALWAYS files are owned by the generator and rewritten every run.
    """

    WRITE_ONCE = "write-once"
    WRITE_ALWAYS = "write-always"


ArtifactContent = Union[tuple[str, ...], Mapping[str, object]]


@dataclass(frozen=True)
class GeneratedArtifact:
    """A file the generator wants to exist.

    Attributes:
        path: POSIX path relative to the directory it is materialized into.
        content: Text lines, or a mapping serialized as JSON. Mappings are
            stored behind a read-only proxy and left out of the hash.
        policy: Overwrite behaviour when the file already exists.
    """

    path: PurePosixPath
    content: ArtifactContent = field(hash=False)
    policy: WritePolicy = WritePolicy.WRITE_ALWAYS

    def __post_init__(self) -> None:
        if self.path.is_absolute() or ".." in self.path.parts:
            raise ValueError(f"Artifact path must be relative: {self.path}")
        if not self.path.parts:
            raise ValueError("Artifact path must not be empty")
        if not isinstance(self.content, tuple):
            object.__setattr__(self, "content", MappingProxyType(dict(self.content)))

    @property
    def is_structured(self) -> bool:
        return not isinstance(self.content, tuple)

    def render(self) -> str:
        """Return the exact text written to disk (always newline-terminated)."""
        if isinstance(self.content, tuple):
            return "\n".join(self.content) + "\n"
        return json.dumps(dict(self.content), indent=2) + "\n"


@dataclass(frozen=True)
class SubLibrary:
    """One independently publishable library inside the workspace.

    ``workspace`` is a back-reference only; the library never owns it.
    """

    name: str
    workspace: Workspace = field(compare=False, repr=False)

    @property
    def outdir(self) -> Path:
        return self.workspace.root / self.name

    @property
    def path_glob(self) -> str:
        """Glob matching every file under the library directory."""
        return f"{self.name}/**"

    @property
    def lock_file(self) -> str:
        return f"{self.name}/package-lock.json"
