"""Shared fixtures: a small versioned documentation tree and its config."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from docmirror.config import CompilerConfig, ExtensionPolicy, FileMapping

if typ.TYPE_CHECKING:
    from pathlib import Path

LOGO_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00fake-logo"

GUIDE_MARKDOWN = dedent(
    """\
    # Getting Started

    Read this first.

    ## Install Steps

    ```python
    print("hello")
    ```

    ### Deep Dive

    | option | default |
    |--------|---------|
    | depth  | 2       |

    Visit [the project](https://example.com/demo) or the [index](index.md).
    """
)


def write_tree(root: Path) -> Path:
    """Write the sample documentation tree below ``root`` and return it."""
    files: dict[str, str | bytes] = {
        "index.md": "# Welcome\n\nStart with the [guide](docs/guide.md).\n",
        "docs/index.md": "# Docs\n\nOverview of the docs.\n",
        "docs/guide.md": GUIDE_MARKDOWN,
        "docs/advanced/tuning.md": "# Tuning\n\n## Cache Size\n\nBigger is better.\n",
        "images/logo.png": LOGO_BYTES,
        "notes.txt": "not published\n",
        ".hidden/secret.md": "# Secret\n",
    }
    for relative, contents in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_text(contents, encoding="utf-8")
    return root


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Return a raw documentation tree for a single version."""
    return write_tree(tmp_path / "raw")


@pytest.fixture
def make_config(tmp_path: Path) -> typ.Callable[..., CompilerConfig]:
    """Return a factory for compiler configs writing below ``tmp_path/build``."""

    def _make(**overrides: typ.Any) -> CompilerConfig:
        values: dict[str, typ.Any] = {
            "project_name": "demo",
            "build_path": tmp_path / "build",
            "extensions": ExtensionPolicy.from_iterables(["md"], ["png"]),
            "file_mapping": FileMapping.from_mapping({"index.md": "index.html"}),
        }
        values.update(overrides)
        return CompilerConfig(**values)

    return _make


@pytest.fixture
def compiler_config(make_config: typ.Callable[..., CompilerConfig]) -> CompilerConfig:
    """Return the default compiler config for the sample tree."""
    return make_config()


@pytest.fixture
def tree_writer() -> typ.Callable[[Path], Path]:
    """Return the helper that writes the sample tree below a directory."""
    return write_tree
