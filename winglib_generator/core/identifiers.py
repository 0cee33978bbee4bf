"""Sub-library name validation.

A name is used verbatim as a directory name, as the unscoped part of the
npm package name, and inside workflow names and git tags, so it must be
safe in all of those places.
"""

import re
from collections.abc import Iterable

from .errors import InvalidIdentifierError

# npm rejects package names longer than this
MAX_NAME_LENGTH = 214

NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")

_RESERVED_NAMES = frozenset({".", "..", "node_modules", "favicon.ico"})


def validate_identifier(name: str) -> str:
    """Return ``name`` unchanged if it is a valid sub-library name.

    Raises:
        InvalidIdentifierError: If the name is empty, too long, reserved, or
            contains characters that are not path/package safe.
    """
    if not name:
        raise InvalidIdentifierError(name, "name must not be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidIdentifierError(
            name, f"name is longer than {MAX_NAME_LENGTH} characters"
        )
    if name in _RESERVED_NAMES:
        raise InvalidIdentifierError(name, "name is reserved")
    if not NAME_PATTERN.match(name):
        raise InvalidIdentifierError(
            name,
            "use lowercase letters, digits, '.', '_' or '-', "
            + "starting with a letter or digit",
        )
    return name


def validate_new_identifier(name: str, seen: set[str]) -> str:
    """Validate ``name`` and record it in ``seen``.

    Raises:
        InvalidIdentifierError: If the name is invalid or already in ``seen``.
    """
    validate_identifier(name)
    if name in seen:
        raise InvalidIdentifierError(name, "name is listed more than once")
    seen.add(name)
    return name


def validate_identifiers(names: Iterable[str]) -> list[str]:
    """Validate every name and reject duplicates, preserving order."""
    seen: set[str] = set()
    return [validate_new_identifier(name, seen) for name in names]
