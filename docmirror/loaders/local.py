"""Load documentation versions from sub-directories of a local folder."""

from __future__ import annotations

import typing as typ

from .models import LoaderError, Version, ordered_versions, version_sort_key

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class LocalLoader:
    """Treat every sub-directory of ``root`` as one version.

    Hidden directories are ignored. When ``versions`` is given, exactly those
    directories are used, in that order.
    """

    def __init__(
        self,
        root: Path,
        *,
        docs_path: str = "",
        versions: cabc.Sequence[str] = (),
    ) -> None:
        self.root = root
        self.docs_path = docs_path
        self._configured = list(versions)

    def versions(self) -> list[Version]:
        """Return the configured versions or every sub-directory, naturally sorted."""
        if self._configured:
            return ordered_versions(self._configured)
        if not self.root.is_dir():
            msg = f"Documentation root '{self.root}' is not a directory."
            raise LoaderError(msg)
        names = [
            entry.name
            for entry in self.root.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        ]
        return ordered_versions(sorted(names, key=version_sort_key))

    def doc_by_version(self, version: Version) -> Path:
        """Return the directory holding ``version``."""
        return self.root / version.name

    def system_path_modifier(self) -> str:
        """Return the docs sub-directory inside each version directory."""
        return self.docs_path

    def cleanup(self) -> None:
        """Leave local sources untouched."""


__all__ = ["LocalLoader"]
