"""Console output helpers for the winglib generator CLI."""

import os
import sys


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    DIM = '\033[2m'
    BOLD = '\033[1m'
    ENDC = '\033[0m'


def _color_enabled() -> bool:
    """Honour NO_COLOR and skip escape codes when stdout is not a terminal."""
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def _paint(msg: str, *codes: str) -> str:
    if not _color_enabled():
        return msg
    return f"{''.join(codes)}{msg}{Colors.ENDC}"


def print_header(msg: str) -> None:
    """Print a header message."""
    print(_paint(msg, Colors.HEADER, Colors.BOLD))


def print_info(msg: str) -> None:
    """Print an info message."""
    print(_paint(msg, Colors.CYAN))


def print_success(msg: str) -> None:
    """Print a success message."""
    print(_paint(f"✓ {msg}", Colors.GREEN))


def print_warning(msg: str) -> None:
    """Print a warning message."""
    print(_paint(f"⚠️  {msg}", Colors.YELLOW))


def print_error(msg: str) -> None:
    """Print an error message to stderr."""
    print(_paint(f"❌ {msg}", Colors.RED), file=sys.stderr)


def print_skipped(path: str) -> None:
    """Report a file left untouched because it already exists."""
    print(_paint(f"⊘ Skipped (exists): {path}", Colors.DIM))
