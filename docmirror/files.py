"""Filesystem helpers and naming conversions shared by the compiler.

The ``force_*`` helpers create any missing parent directories before writing,
so callers can mirror a source tree without pre-creating its layout. Errors
from the operating system are not swallowed; the compiler decides how to
surface them.

Examples
--------
>>> from docmirror.files import filename_to_heading, heading_to_filename
>>> filename_to_heading("getting-started.md")
'Getting started'
>>> heading_to_filename("Getting Started")
'getting-started'
>>> reverse_path("a/b/c.html", 1)
'../../'
"""

from __future__ import annotations

import os
import shutil
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

PARENT_SEGMENT = "../"


def force_create_path(path: Path) -> Path:
    """Create ``path`` and every missing parent directory."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def force_write(path: Path, contents: str | bytes) -> Path:
    """Write ``contents`` to ``path``, creating parent directories first."""
    force_create_path(path.parent)
    if isinstance(contents, bytes):
        path.write_bytes(contents)
    else:
        path.write_text(contents, encoding="utf-8")
    return path


def force_copy(source: Path, destination: Path) -> Path:
    """Copy ``source`` byte-for-byte to ``destination``."""
    force_create_path(destination.parent)
    shutil.copyfile(source, destination)
    return destination


def recursive_copy(source: Path, destination: Path) -> bool:
    """Copy the directory ``source`` into ``destination``.

    Returns ``False`` without touching the filesystem when ``source`` is not a
    directory. Existing files in ``destination`` are overwritten.
    """
    if not source.is_dir():
        return False
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return True


def recursive_delete(path: Path) -> None:
    """Delete ``path`` with everything below it; missing paths are ignored."""
    if not path.exists():
        return
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def reverse_path(path: str | os.PathLike[str], offset: int = 0) -> str:
    """Return the ``../`` prefix that climbs back out of ``path``.

    One segment is emitted per ``/``-separated component of ``path`` minus
    ``offset``; a leading ``/`` counts as an (empty) component.

    Parameters
    ----------
    path : str | os.PathLike[str]
        Relative, ``/``-separated path such as ``"docs/guide.html"``.
    offset : int, optional
        Number of components that should not be climbed. Defaults to ``0``.

    Returns
    -------
    str
        A string such as ``"../../"``; empty when there is nothing to climb.

    Examples
    --------
    >>> reverse_path("a.html")
    '../'
    >>> reverse_path("/docs/guide.html", 1)
    '../../'
    """
    parts = os.fspath(path).split("/")
    return PARENT_SEGMENT * max(len(parts) - offset, 0)


def version_directory(name: str) -> str:
    """Return ``name`` as a single path segment for a version's output.

    Branch names such as ``release/1.x`` would otherwise nest the version one
    level deeper than its siblings and the shared ``vendor/`` directory.

    Examples
    --------
    >>> version_directory("release/1.x")
    'release-1.x'
    """
    return name.replace("/", "-").replace("\\", "-")


def filename_to_heading(filename: str) -> str:
    """Turn a file or directory name into a display label.

    Everything from the first ``.`` is dropped, hyphens become spaces,
    underscores become periods, and the first character is upper-cased.
    """
    stem = filename.split(".", 1)[0]
    label = stem.replace("-", " ").replace("_", ".")
    return label[:1].upper() + label[1:]


def heading_to_filename(heading: str) -> str:
    """Turn heading text into the anchor id used for that heading.

    Spaces become hyphens, periods become underscores, and the result is
    lower-cased.
    """
    return heading.replace(" ", "-").replace(".", "_").lower()


def sorted_entries(
    directory: Path, *, include_hidden: bool = False
) -> cabc.Iterator[Path]:
    """Yield the entries of ``directory`` sorted by name.

    Entries whose name starts with ``.`` are skipped unless ``include_hidden``
    is set.
    """
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if not include_hidden and entry.name.startswith("."):
            continue
        yield entry


__all__ = [
    "filename_to_heading",
    "force_copy",
    "force_create_path",
    "force_write",
    "heading_to_filename",
    "recursive_copy",
    "recursive_delete",
    "reverse_path",
    "sorted_entries",
    "version_directory",
]
