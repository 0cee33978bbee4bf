"""Write generated artifacts to disk.

Each target path is either absent or present. The first materialization
moves it to present. After that, WRITE_ONCE artifacts are left alone and
WRITE_ALWAYS artifacts are overwritten.
"""

from enum import Enum
from pathlib import Path

from winglib_generator.helpers.helpers_logging import (
    print_info,
    print_skipped,
    print_success,
)

from .artifacts import GeneratedArtifact, WritePolicy
from .errors import MaterializationError

# Owner read/write, everyone else read
WRITABLE_FILE_MODE = 0o644


class MaterializeOutcome(Enum):
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"


def plan_outcome(target: Path, policy: WritePolicy) -> MaterializeOutcome:
    """Return what materializing to ``target`` would do, without writing."""
    if not target.exists():
        return MaterializeOutcome.CREATED
    if policy is WritePolicy.WRITE_ONCE:
        return MaterializeOutcome.SKIPPED
    return MaterializeOutcome.OVERWRITTEN


def materialize(
    base_dir: Path,
    artifact: GeneratedArtifact,
    *,
    library: str | None = None,
    display_root: Path | None = None,
    dry_run: bool = False,
) -> MaterializeOutcome:
    """Write ``artifact`` under ``base_dir`` according to its write policy.

    Args:
        base_dir: Directory the artifact path is relative to.
        artifact: File to write.
        library: Library name used in error messages.
        display_root: Paths in log lines are shown relative to this directory.
        dry_run: Report the outcome without touching the filesystem.

    Returns:
        The outcome for this path.

    Raises:
        MaterializationError: If the file or its parent directories cannot be
            written.
    """
    target = base_dir.joinpath(*artifact.path.parts)
    shown = _display_path(target, display_root or base_dir)
    outcome = plan_outcome(target, artifact.policy)

    if outcome is MaterializeOutcome.SKIPPED:
        print_skipped(shown)
        return outcome

    if dry_run:
        print_info(f"Would {'create' if outcome is MaterializeOutcome.CREATED else 'update'}: {shown}")
        return outcome

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(artifact.render(), encoding="utf-8")
        target.chmod(WRITABLE_FILE_MODE)
    except OSError as exc:
        raise MaterializationError(target, exc, library) from exc

    if outcome is MaterializeOutcome.CREATED:
        print_success(f"Created file: {shown}")
    else:
        print_success(f"Updated file: {shown}")
    return outcome


def _display_path(target: Path, root: Path) -> str:
    try:
        return target.relative_to(root).as_posix()
    except ValueError:
        return str(target)
