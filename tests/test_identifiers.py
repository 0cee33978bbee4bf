"""Tests for library name validation."""

import pytest

from winglib_generator.core.errors import InvalidIdentifierError
from winglib_generator.core.identifiers import (
    MAX_NAME_LENGTH,
    validate_identifier,
    validate_identifiers,
    validate_new_identifier,
)


class TestValidateIdentifier:

    @pytest.mark.parametrize(
        "name",
        ["dynamodb", "checks", "react-app", "s3.bucket", "a", "lib_2", "9lives"],
    )
    def test_accepts_path_safe_names(self, name: str) -> None:
        assert validate_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        ["", "Dynamo", "-lead", ".hidden", "with space", "a/b", "..", "a\\b", "ünï"],
    )
    def test_rejects_unsafe_names(self, name: str) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            validate_identifier(name)
        assert exc_info.value.name == name

    def test_rejects_reserved_name(self) -> None:
        with pytest.raises(InvalidIdentifierError, match="reserved"):
            validate_identifier("node_modules")

    def test_rejects_too_long_name(self) -> None:
        name = "a" * (MAX_NAME_LENGTH + 1)
        with pytest.raises(InvalidIdentifierError, match="longer than"):
            validate_identifier(name)

    def test_empty_name_message(self) -> None:
        with pytest.raises(InvalidIdentifierError, match="must not be empty"):
            validate_identifier("")


class TestValidateIdentifiers:

    def test_preserves_order(self) -> None:
        assert validate_identifiers(["checks", "dynamodb"]) == ["checks", "dynamodb"]

    def test_rejects_duplicates(self) -> None:
        with pytest.raises(InvalidIdentifierError, match="more than once"):
            validate_identifiers(["checks", "dynamodb", "checks"])

    def test_first_invalid_name_is_reported(self) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            validate_identifiers(["ok", "Bad", ""])
        assert exc_info.value.name == "Bad"


class TestValidateNewIdentifier:

    def test_records_name(self) -> None:
        seen: set[str] = set()
        assert validate_new_identifier("checks", seen) == "checks"
        assert seen == {"checks"}

    def test_rejects_seen_name(self) -> None:
        with pytest.raises(InvalidIdentifierError, match="more than once"):
            validate_new_identifier("checks", {"checks"})

    def test_invalid_name_is_not_recorded(self) -> None:
        seen: set[str] = set()
        with pytest.raises(InvalidIdentifierError):
            validate_new_identifier("Bad", seen)
        assert seen == set()
