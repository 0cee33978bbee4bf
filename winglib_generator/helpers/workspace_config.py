"""Workspace configuration (``winglibs.yaml``).

Example winglibs.yaml:
    libraries:
      - dynamodb
      - checks
    npm_scope: marciocadev
    repository_url: https://github.com/marciocadev/pj-winglib.git
    author:
      name: Marcio Cruz de Almeida
      email: marciocadev@gmail.com
    license:
      owner: wing
      period: "2023"
    ci:
      main_branch: main
      node_version: 20.x

Every key is optional; missing keys fall back to the defaults below.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import cast

from winglib_generator.core.errors import ConfigError
from winglib_generator.helpers.helpers_logging import print_warning
from winglib_generator.helpers.yaml_loader import YAMLError, safe_load_text

CONFIG_FILE_NAME = "winglibs.yaml"


@dataclass(frozen=True)
class CISettings:
    """Values the workflow templates are parameterized with."""

    main_branch: str = "main"
    runs_on: str = "ubuntu-latest"
    node_version: str = "20.x"
    registry_url: str = "https://registry.npmjs.org"
    checkout_action: str = "actions/checkout@v3"
    setup_node_action: str = "actions/setup-node@v3"
    tagger_action: str = "tvdias/github-tagger@v0.0.1"
    release_action: str = "softprops/action-gh-release@v1"
    npm_token_secret: str = "NPM_TOKEN"
    github_token_secret: str = "PROJEN_GITHUB_TOKEN"


@dataclass(frozen=True)
class WorkspaceConfig:
    """Owner metadata shared by every generated library."""

    libraries: tuple[str, ...] = ()
    npm_scope: str = "marciocadev"
    repository_url: str = "https://github.com/marciocadev/pj-winglib.git"
    author_name: str = "Marcio Cruz de Almeida"
    author_email: str = "marciocadev@gmail.com"
    license_owner: str = "wing"
    license_period: str = "2023"
    license_spdx: str = "MIT"
    platforms: tuple[str, ...] = ("sim",)
    ci: CISettings = field(default_factory=CISettings)

    def scoped_name(self, name: str) -> str:
        """Return the npm package name for library ``name``."""
        return f"@{self.npm_scope}/{name}"


_TOP_LEVEL_KEYS = frozenset({
    "libraries",
    "npm_scope",
    "repository_url",
    "author",
    "license",
    "platforms",
    "ci",
})

_SUPPORTED_LICENSES = ("MIT",)


def find_workspace_root(start: Path | None = None) -> Path:
    """Search upwards from ``start`` for a directory holding winglibs.yaml.

    Falls back to ``start`` (or the current directory) so a brand new
    workspace can be generated where the command is executed.
    """
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILE_NAME).is_file():
            return parent
    return current


def _require_str(path: Path, key: str, value: object) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # "period: 2023" parses as int
        return str(value)
    if not isinstance(value, str) or not value:
        raise ConfigError(path, f"'{key}' must be a non-empty string")
    return value


def _require_str_list(path: Path, key: str, value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(path, f"'{key}' must be a list of strings")
    items = cast(list[object], value)
    return tuple(_require_str(path, f"{key}[{i}]", item) for i, item in enumerate(items))


def _require_mapping(path: Path, key: str, value: object) -> dict[str, object]:
    if not isinstance(value, dict):
        raise ConfigError(path, f"'{key}' must be a mapping")
    return cast(dict[str, object], value)


def _parse_ci(path: Path, raw: dict[str, object]) -> CISettings:
    known = {f.name for f in fields(CISettings)}
    overrides: dict[str, str] = {}
    for key, value in raw.items():
        if key not in known:
            print_warning(f"{path.name}: unknown ci key '{key}' ignored")
            continue
        overrides[key] = _require_str(path, f"ci.{key}", value)
    return replace(CISettings(), **overrides)


def parse_workspace_config(data: object, path: Path) -> WorkspaceConfig:
    """Build a WorkspaceConfig from parsed YAML data.

    Raises:
        ConfigError: If a key has the wrong type or the license is unsupported.
    """
    if data is None:
        return WorkspaceConfig()
    raw = _require_mapping(path, "<root>", data)

    for key in raw:
        if key not in _TOP_LEVEL_KEYS:
            print_warning(f"{path.name}: unknown key '{key}' ignored")

    config = WorkspaceConfig()
    overrides: dict[str, object] = {}

    if "libraries" in raw:
        overrides["libraries"] = _require_str_list(path, "libraries", raw["libraries"])
    if "platforms" in raw:
        overrides["platforms"] = _require_str_list(path, "platforms", raw["platforms"])
    for key in ("npm_scope", "repository_url"):
        if key in raw:
            overrides[key] = _require_str(path, key, raw[key])

    if "author" in raw:
        author = _require_mapping(path, "author", raw["author"])
        if "name" in author:
            overrides["author_name"] = _require_str(path, "author.name", author["name"])
        if "email" in author:
            overrides["author_email"] = _require_str(path, "author.email", author["email"])

    if "license" in raw:
        license_raw = _require_mapping(path, "license", raw["license"])
        if "owner" in license_raw:
            overrides["license_owner"] = _require_str(
                path, "license.owner", license_raw["owner"]
            )
        if "period" in license_raw:
            overrides["license_period"] = _require_str(
                path, "license.period", license_raw["period"]
            )
        if "spdx" in license_raw:
            spdx = _require_str(path, "license.spdx", license_raw["spdx"])
            if spdx not in _SUPPORTED_LICENSES:
                raise ConfigError(
                    path,
                    f"license.spdx '{spdx}' is not supported "
                    + f"(supported: {', '.join(_SUPPORTED_LICENSES)})",
                )
            overrides["license_spdx"] = spdx

    if "ci" in raw:
        overrides["ci"] = _parse_ci(path, _require_mapping(path, "ci", raw["ci"]))

    return replace(config, **overrides)


def load_workspace_config(root: Path) -> WorkspaceConfig:
    """Load ``<root>/winglibs.yaml``, or defaults when the file is absent.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid values.
    """
    config_path = root / CONFIG_FILE_NAME
    if not config_path.is_file():
        return WorkspaceConfig()

    try:
        data = safe_load_text(config_path.read_text(encoding="utf-8"))
    except YAMLError as exc:
        raise ConfigError(config_path, f"invalid YAML: {exc}") from exc

    return parse_workspace_config(data, config_path)
