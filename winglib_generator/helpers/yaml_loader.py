#!/usr/bin/env python3
"""
YAML helpers for the generator.

Workflow documents are written and read back through a ruamel.yaml
round-trip instance (YAML 1.2, so keys such as ``on`` stay strings).
Workspace configuration is plain data and goes through PyYAML ``safe_load``.
"""

from io import StringIO
from pathlib import Path
from typing import Protocol, TextIO, Union, cast

import yaml as pyyaml
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

# Recursive type for nested YAML structures
ConfigValue = Union[str, int, float, bool, None, 'ConfigDict', list['ConfigValue']]
ConfigDict = dict[str, ConfigValue]


class YAMLLoader(Protocol):
    """Protocol for the round-trip YAML instance."""
    preserve_quotes: bool
    default_flow_style: bool

    def load(self, stream: TextIO) -> ConfigValue:
        """Load YAML from stream."""
        ...

    def dump(self, data: object, stream: TextIO) -> None:
        """Dump YAML to stream."""
        ...


def _validate_yaml_loader(obj: object) -> None:
    """Runtime validation: ensure the YAML object has the expected interface.

    Raises:
        AttributeError: If required attributes/methods are missing
        TypeError: If methods are not callable
    """
    required_attrs = ['load', 'dump', 'preserve_quotes', 'default_flow_style']
    for attr in required_attrs:
        if not hasattr(obj, attr):
            raise AttributeError(f"YAML object missing required attribute: {attr}")
    for method in ('load', 'dump'):
        if not callable(getattr(obj, method)):
            raise TypeError(f"YAML.{method} is not callable")


def _create_yaml_loader() -> YAMLLoader:
    """Create the round-trip instance used for workflow files.

    Block style everywhere, sequences indented under their parent key the
    way GitHub Actions examples are written.
    """
    yaml_obj = YAML()
    yaml_obj.preserve_quotes = True
    yaml_obj.default_flow_style = False
    yaml_obj.width = 4096
    yaml_obj.indent(mapping=2, sequence=4, offset=2)

    _validate_yaml_loader(yaml_obj)
    return cast(YAMLLoader, yaml_obj)


# Module-level singleton
yaml: YAMLLoader = _create_yaml_loader()


def _to_round_trip(data: object) -> object:
    """Convert plain dicts/lists so the dumper keeps insertion order.

    The round-trip representer sorts keys of plain ``dict`` objects.
    """
    if isinstance(data, dict):
        mapping = CommentedMap()
        for key, value in cast(dict[object, object], data).items():
            mapping[key] = _to_round_trip(value)
        return mapping
    if isinstance(data, list):
        return CommentedSeq(_to_round_trip(item) for item in cast(list[object], data))
    return data


def dump_yaml_string(data: object) -> str:
    """Serialize ``data`` with the round-trip instance and return the text."""
    stream = StringIO()
    yaml.dump(_to_round_trip(data), stream)
    return stream.getvalue()


def load_yaml_file(file_path: Path) -> ConfigDict:
    """Load a YAML file with the round-trip instance.

    Raises:
        FileNotFoundError: If file does not exist
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with file_path.open(encoding='utf-8') as f:
        raw: ConfigValue = yaml.load(f)
        return cast(ConfigDict, raw)


YAMLError = pyyaml.YAMLError


def safe_load_text(text: str) -> object:
    """Parse plain-data YAML (no tags, no comments kept)."""
    return pyyaml.safe_load(text)


__all__ = [
    "ConfigDict",
    "ConfigValue",
    "YAMLError",
    "dump_yaml_string",
    "load_yaml_file",
    "safe_load_text",
    "yaml",
]
