"""Name-parameterized content builders.

Each builder is a pure function of the library name and the workspace
configuration. The only variation between two libraries is the name itself.

Write policy per artifact:
    package.json          WRITE_ALWAYS (generator owned)
    LICENSE               WRITE_ALWAYS
    README.md             WRITE_ALWAYS
    <name>.w              WRITE_ONCE   (developer owned after first run)
    tests/<name>.test.w   WRITE_ONCE
"""

from pathlib import PurePosixPath

from winglib_generator.helpers.workspace_config import WorkspaceConfig

from .artifacts import GeneratedArtifact, WritePolicy

MANIFEST_FILE = "package.json"
LICENSE_FILE = "LICENSE"
README_FILE = "README.md"

INITIAL_VERSION = "0.0.1"

_MIT_LICENSE_BODY = (
    "Permission is hereby granted, free of charge, to any person obtaining a copy",
    'of this software and associated documentation files (the "Software"), to deal',
    "in the Software without restriction, including without limitation the rights",
    "to use, copy, modify, merge, publish, distribute, sublicense, and/or sell",
    "copies of the Software, and to permit persons to whom the Software is",
    "furnished to do so, subject to the following conditions:",
    "",
    "The above copyright notice and this permission notice shall be included in all",
    "copies or substantial portions of the Software.",
    "",
    'THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR',
    "IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,",
    "FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE",
    "AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER",
    "LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,",
    "OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE",
    "SOFTWARE.",
)


def source_stub_path(name: str) -> PurePosixPath:
    return PurePosixPath(f"{name}.w")


def test_stub_path(name: str) -> PurePosixPath:
    return PurePosixPath("tests") / f"{name}.test.w"


def build_manifest(name: str, config: WorkspaceConfig) -> GeneratedArtifact:
    """Build package.json.

    ``repository.directory`` points at the library folder so every library
    in the shared repository can be published on its own.
    """
    manifest: dict[str, object] = {
        "name": config.scoped_name(name),
        "description": f"{name} library for Wing",
        "version": INITIAL_VERSION,
        "repository": {
            "type": "git",
            "url": config.repository_url,
            "directory": name,
        },
        "author": {
            "name": config.author_name,
            "email": config.author_email,
        },
        "wing": {
            "platforms": list(config.platforms),
        },
        "license": config.license_spdx,
    }
    return GeneratedArtifact(PurePosixPath(MANIFEST_FILE), manifest, WritePolicy.WRITE_ALWAYS)


def build_license(name: str, config: WorkspaceConfig) -> GeneratedArtifact:
    """Build the MIT LICENSE file for the configured owner and period."""
    del name  # same grant for every library
    lines = (
        "MIT License",
        "",
        f"Copyright (c) {config.license_period} {config.license_owner}",
        "",
        *_MIT_LICENSE_BODY,
    )
    return GeneratedArtifact(PurePosixPath(LICENSE_FILE), lines, WritePolicy.WRITE_ALWAYS)


def build_readme(name: str, config: WorkspaceConfig) -> GeneratedArtifact:
    """Build README.md with install and usage snippets for ``name``."""
    lines = (
        f"# {name}",
        "",
        "## Prerequisites",
        "",
        "* [winglang](https://winglang.io).",
        "",
        "## Installation",
        "",
        "```sh",
        f"npm i {config.scoped_name(name)}",
        "```",
        "",
        "## Usage",
        "",
        "```js",
        f"bring {name};",
        "",
        f"let adder = new {name}.Adder();",
        "```",
        "",
        "## License",
        "",
        f"This library is licensed under the [{config.license_spdx} License](./LICENSE).",
    )
    return GeneratedArtifact(PurePosixPath(README_FILE), lines, WritePolicy.WRITE_ALWAYS)


def build_source_stub(name: str, config: WorkspaceConfig) -> GeneratedArtifact:
    """Build the starter ``<name>.w`` with a single ``Adder`` class."""
    del config
    lines = (
        "pub class Adder {",
        "  pub inflight add (x: num, y: num): num {",
        "    return x + y;",
        "  }",
        "}",
    )
    return GeneratedArtifact(source_stub_path(name), lines, WritePolicy.WRITE_ONCE)


def build_test_stub(name: str, config: WorkspaceConfig) -> GeneratedArtifact:
    """Build ``tests/<name>.test.w`` exercising the starter class."""
    del config
    lines = (
        "bring expect;",
        f'bring "../{name}.w" as l;',
        "",
        "let adder = new l.Adder();",
        "",
        'test "add() adds two numbers" {',
        "  expect.equal(adder.add(1, 2), 3);",
        "}",
    )
    return GeneratedArtifact(test_stub_path(name), lines, WritePolicy.WRITE_ONCE)


BUILDERS = (
    build_manifest,
    build_license,
    build_readme,
    build_source_stub,
    build_test_stub,
)


def build_artifacts(name: str, config: WorkspaceConfig) -> list[GeneratedArtifact]:
    """Return every artifact for ``name`` in a stable order."""
    return [builder(name, config) for builder in BUILDERS]
