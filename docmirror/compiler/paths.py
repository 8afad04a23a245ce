"""Output naming rules shared by the compiler and the navigation generator."""

from __future__ import annotations

import posixpath
import typing as typ

from docmirror._constants import HTML_EXTENSION

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docmirror.config import CompilerConfig


def output_name(relative: str, config: CompilerConfig, *, convert: bool) -> str:
    """Return the output path for the ``/``-separated source path ``relative``.

    The file mapping is applied first. When ``convert`` is set and the mapped
    name still carries a processed extension, that extension becomes ``html``.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docmirror.config import CompilerConfig, ExtensionPolicy, FileMapping
    >>> config = CompilerConfig(
    ...     project_name="demo",
    ...     build_path=Path("build"),
    ...     extensions=ExtensionPolicy.from_iterables(["md"], ["png"]),
    ...     file_mapping=FileMapping((("README.md", "index.html"),)),
    ... )
    >>> output_name("docs/README.md", config, convert=True)
    'docs/index.html'
    >>> output_name("docs/guide.MD", config, convert=True)
    'docs/guide.html'
    """
    mapped = config.file_mapping.apply(relative)
    if not convert:
        return mapped
    stem, extension = posixpath.splitext(mapped)
    if extension.lstrip(".").lower() in config.extensions.processed:
        return f"{stem}.{HTML_EXTENSION}"
    return mapped


def read_source(path: Path) -> str:
    """Read a source document as text, replacing undecodable bytes."""
    return path.read_text(encoding="utf-8", errors="replace")


__all__ = ["output_name", "read_source"]
