"""Types shared by every documentation loader."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from docmirror.files import version_directory

if typ.TYPE_CHECKING:
    from pathlib import Path

_NUMBER_SPLIT = re.compile(r"(\d+)")


class LoaderError(RuntimeError):
    """Raised when versions cannot be listed or a version cannot be fetched."""


@dc.dataclass(frozen=True, slots=True)
class Version:
    """A published version of the documentation.

    Attributes
    ----------
    name : str
        Tag or branch name. ``slug`` is the output directory name.
    order : int
        Position of the version in the switcher, lowest first.
    """

    name: str
    order: int = 0

    @property
    def slug(self) -> str:
        """Directory and URL segment the version is published under."""
        return version_directory(self.name)


@typ.runtime_checkable
class Loader(typ.Protocol):
    """Materialize raw documentation trees for each published version."""

    def versions(self) -> list[Version]:
        """Return every version to compile, in switcher order."""
        ...

    def doc_by_version(self, version: Version) -> Path:
        """Return the local root of ``version``'s materialized tree."""
        ...

    def system_path_modifier(self) -> str:
        """Return the docs sub-directory inside each materialized tree."""
        ...

    def cleanup(self) -> None:
        """Release whatever ``doc_by_version`` materialized."""
        ...


def version_sort_key(name: str) -> tuple[tuple[int, int | str], ...]:
    """Sort key that orders ``1.10`` after ``1.9``.

    Examples
    --------
    >>> sorted(["1.10", "1.9", "0.8"], key=version_sort_key)
    ['0.8', '1.9', '1.10']
    """
    parts = (part for part in _NUMBER_SPLIT.split(name) if part)
    return tuple((0, int(part)) if part.isdigit() else (1, part) for part in parts)


def ordered_versions(names: typ.Iterable[str]) -> list[Version]:
    """Return ``names`` as versions numbered in the given order."""
    return [Version(name=name, order=index) for index, name in enumerate(names)]


__all__ = [
    "Loader",
    "LoaderError",
    "Version",
    "ordered_versions",
    "version_sort_key",
]
