"""Typed dataclasses describing docmirror build configuration."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from docmirror._constants import (
    DEFAULT_NAVIGATION_BASE,
    PROJECT_MARKER,
    VERSION_MARKER,
)
from docmirror.files import version_directory

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


def _normalize_extension(value: object) -> str:
    return str(value).strip().lstrip(".").lower()


@dc.dataclass(frozen=True, slots=True)
class ExtensionPolicy:
    """Decide whether a file is converted, copied verbatim, or skipped.

    Attributes
    ----------
    processed : frozenset[str]
        Lower-case extensions (without dot) converted to HTML.
    preserved : frozenset[str]
        Lower-case extensions copied byte-for-byte.
    """

    processed: frozenset[str]
    preserved: frozenset[str]

    def __post_init__(self) -> None:
        overlap = self.processed & self.preserved
        if overlap:
            listed = ", ".join(sorted(overlap))
            msg = f"Extensions cannot be both processed and preserved: {listed}"
            raise SiteConfigError(msg)

    @classmethod
    def from_iterables(
        cls, processed: cabc.Iterable[object], preserved: cabc.Iterable[object]
    ) -> ExtensionPolicy:
        """Build a policy from raw values such as ``[".MD", "png"]``."""
        return cls(
            processed=frozenset(
                ext for ext in map(_normalize_extension, processed) if ext
            ),
            preserved=frozenset(
                ext for ext in map(_normalize_extension, preserved) if ext
            ),
        )

    def is_processed(self, path: Path) -> bool:
        """Return ``True`` when ``path`` should be converted to HTML."""
        return _normalize_extension(path.suffix) in self.processed

    def is_preserved(self, path: Path) -> bool:
        """Return ``True`` when ``path`` should be copied unchanged."""
        return _normalize_extension(path.suffix) in self.preserved


@dc.dataclass(frozen=True, slots=True)
class FileMapping:
    """Ordered literal substitutions applied to every output path.

    All pairs are applied in one pass, so a replacement is never fed to a
    later pair. When two sources match at the same position the one listed
    first wins.
    """

    pairs: tuple[tuple[str, str], ...] = ()
    _pattern: re.Pattern[str] | None = dc.field(
        init=False, repr=False, compare=False, default=None
    )

    def __post_init__(self) -> None:
        sources = [source for source, _ in self.pairs]
        if any(not source for source in sources):
            msg = "File mapping sources must be non-empty strings."
            raise SiteConfigError(msg)
        if sources:
            pattern = re.compile("|".join(re.escape(source) for source in sources))
            object.__setattr__(self, "_pattern", pattern)

    @classmethod
    def from_mapping(
        cls, mapping: cabc.Mapping[str, str] | cabc.Iterable[tuple[str, str]]
    ) -> FileMapping:
        """Build a mapping from an ordered dict or a sequence of pairs."""
        items = mapping.items() if hasattr(mapping, "items") else mapping
        return cls(tuple((str(source), str(target)) for source, target in items))

    def apply(self, path: str) -> str:
        """Return ``path`` with every mapped substring replaced."""
        if self._pattern is None:
            return path
        lookup = dict(self.pairs)
        return self._pattern.sub(lambda match: lookup[match.group(0)], path)

    def index_source(self, index_file_name: str) -> str:
        """Return the source name that is mapped onto ``index_file_name``.

        Raises
        ------
        SiteConfigError
            When no pair, or more than one pair, targets ``index_file_name``.
        """
        sources = [source for source, target in self.pairs if target == index_file_name]
        if len(sources) != 1:
            msg = (
                f"Exactly one file mapping must target '{index_file_name}', "
                f"found {len(sources)}."
            )
            raise SiteConfigError(msg)
        return sources[0]


@dc.dataclass(slots=True)
class CompilerConfig:
    """Everything the compiler needs to turn one source tree into HTML."""

    project_name: str
    build_path: Path
    extensions: ExtensionPolicy
    file_mapping: FileMapping
    index_file_name: str = "index.html"
    navigation_file_name: str = "navigation"
    version_switcher_file_name: str = "version-switcher"
    navigation_base: str = DEFAULT_NAVIGATION_BASE
    navigation_heading_depth: int = 2
    project_site: str = ""
    template_path: Path | None = None
    pygments_style: str = "monokai"
    include_hidden: bool = False

    def __post_init__(self) -> None:
        if self.navigation_heading_depth < 1:
            msg = "Navigation heading depth must be at least 1."
            raise SiteConfigError(msg)
        self.file_mapping.index_source(self.index_file_name)

    @property
    def mapped_index_file(self) -> str:
        """Source file name that serves as each directory's index page."""
        return self.file_mapping.index_source(self.index_file_name)

    def output_root(self, target_base: str, version: str) -> Path:
        """Return the directory a version of ``target_base`` is written to."""
        return self.build_path / target_base / version_directory(version)

    def navigation_root(self, target_base: str, version: str) -> str:
        """Return the prefix of every sidebar link for one compiled version.

        ``{project}`` and ``{version}`` in ``navigation_base`` are replaced by
        ``target_base`` and the version's directory name. The default base is
        absolute from the build path, so links resolve from any page depth.

        Examples
        --------
        >>> config.navigation_root("demo", "release/1.x")  # doctest: +SKIP
        '/demo/release-1.x/'
        """
        return self.navigation_base.replace(PROJECT_MARKER, target_base).replace(
            VERSION_MARKER, version_directory(version)
        )


@dc.dataclass(slots=True)
class LoaderConfig:
    """Where the raw documentation for each version comes from."""

    handler: str
    source: str
    docs_path: str = ""
    versions: list[str] = dc.field(default_factory=list)
    branches: list[str] = dc.field(default_factory=list)
    token: str | None = None
    api_base: str = "https://api.github.com"
    work_dir: Path | None = None


@dc.dataclass(slots=True)
class SiteConfig:
    """Compiler and loader settings for one documented project."""

    compiler: CompilerConfig
    loader: LoaderConfig


__all__ = [
    "CompilerConfig",
    "ExtensionPolicy",
    "FileMapping",
    "LoaderConfig",
    "SiteConfig",
    "SiteConfigError",
]
