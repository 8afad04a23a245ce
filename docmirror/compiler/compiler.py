"""Compile one version of a documentation tree into a static HTML mirror.

:class:`Compiler` writes the version switcher and navigation fragments, then
walks the source tree: processed documents run through the pipeline and the
page template, preserved assets are copied byte-for-byte, anything else is
skipped. Output lands in ``<build_path>/<target_base>/<version>/``.

Example
-------
>>> from pathlib import Path
>>> from docmirror.compiler import Compiler
>>> from docmirror.loaders import Version
>>> compiler = Compiler(config)  # doctest: +SKIP
>>> compiler.compile(Path("raw/2.0"), "demo", "2.0", [Version("1.0"), Version("2.0")])  # doctest: +SKIP
True
"""

from __future__ import annotations

import logging
import os
import typing as typ
from urllib.parse import quote

from docmirror._constants import (
    CONTENT,
    NAVIGATION_BASE,
    NAVIGATION_ELEMENT,
    PROJECT_SITE,
    RELATIVE_BASE_URL,
    VENDOR_DIR,
    VERSION_SWITCH_BASE,
    VERSION_SWITCH_FILE,
    VERSION_SWITCHER_ELEMENT,
)
from docmirror.files import force_copy, force_write, reverse_path, sorted_entries
from docmirror.template import PageTemplate, fragment_environment

from .navigation import NavigationGenerator
from .paths import output_name, read_source
from .pipeline import Pipeline, build_pipeline
from .version_switch import VersionSwitchGenerator

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Environment

    from docmirror.config import CompilerConfig
    from docmirror.loaders import Version

logger = logging.getLogger(__name__)


class CompilationError(RuntimeError):
    """Raised when the output tree cannot be read from or written to disk."""


class Compiler:
    """Turn a raw documentation tree into templated HTML pages."""

    def __init__(
        self,
        config: CompilerConfig,
        *,
        pipeline: Pipeline | None = None,
        template: PageTemplate | None = None,
        env: Environment | None = None,
    ) -> None:
        """Initialize the compiler and its collaborators.

        Parameters
        ----------
        config : CompilerConfig
            Build configuration (extensions, file mapping, fragment names...).
        pipeline : Pipeline, optional
            Pre-compiler/converter/post-compiler chain; defaults to the pipeline
            for a local source.
        template : PageTemplate, optional
            Page skeleton; defaults to ``config.template_path`` or the bundled
            template.
        env : Environment, optional
            Jinja environment used for the navigation and version fragments.
        """
        self.config = config
        self.pipeline = pipeline or build_pipeline(config, "local")
        self.template = template or PageTemplate.from_path(config.template_path)
        env = env or fragment_environment()
        self.navigation = NavigationGenerator(config, self.pipeline, env=env)
        self.version_switch = VersionSwitchGenerator(
            config.version_switcher_file_name, env=env
        )

    def compile(
        self,
        source_root: Path,
        target_base: str,
        current_version: str,
        versions: cabc.Sequence[Version],
    ) -> bool:
        """Compile ``source_root`` as ``current_version`` of ``target_base``.

        Parameters
        ----------
        source_root : Path
            Directory holding the raw documentation of ``current_version``.
        target_base : str
            Directory below the build path that holds every version.
        current_version : str
            Name of the version being compiled.
        versions : Sequence[Version]
            Every published version, in switcher order.

        Returns
        -------
        bool
            ``False`` when ``source_root`` is not a readable directory, in
            which case nothing is written; ``True`` otherwise.

        Raises
        ------
        CompilationError
            When reading a source file or writing the output tree fails.
        """
        if not _is_readable_directory(source_root):
            logger.warning("Source tree %s is not readable; skipping", source_root)
            return False

        output_root = self.config.output_root(target_base, current_version)
        logger.info(
            "Compiling %s %s from %s into %s",
            target_base,
            current_version,
            source_root,
            output_root,
        )
        try:
            switcher_path = self.compile_version_switch(
                versions, current_version, output_root
            )
            navigation = self.generate_navigation(
                source_root,
                output_root,
                self.config.navigation_root(target_base, current_version),
            )
            self.template.reset()
            self.template.fill_global(
                {
                    NAVIGATION_ELEMENT: navigation,
                    PROJECT_SITE: self.config.project_site,
                }
            )
            switcher = switcher_path.read_text(encoding="utf-8")
            written = 0
            for path in self._walk(source_root):
                if self._compile_file(path, source_root, output_root, switcher):
                    written += 1
        except OSError as exc:
            msg = f"Failed to compile '{source_root}' into '{output_root}': {exc}"
            raise CompilationError(msg) from exc

        logger.info("Wrote %d files for %s %s", written, target_base, current_version)
        return True

    def compile_version_switch(
        self,
        versions: cabc.Sequence[Version],
        current_version: str,
        output_root: Path,
    ) -> Path:
        """Write the version switcher fragment below ``output_root``."""
        path = output_root / f"{self.config.version_switcher_file_name}.html"
        return self.version_switch.generate(versions, current_version, path)

    def generate_navigation(
        self, source_root: Path, output_root: Path, base: str = ""
    ) -> str:
        """Write the navigation fragment below ``output_root`` and return it."""
        path = output_root / f"{self.config.navigation_file_name}.html"
        return self.navigation.generate(source_root, path, base)

    def compile_file(self, path: Path) -> str:
        """Return the converted HTML body of the document at ``path``."""
        return self.pipeline.compile(read_source(path))

    def _walk(self, directory: Path) -> cabc.Iterator[Path]:
        """Yield files below ``directory`` depth-first, in name order."""
        entries = sorted_entries(directory, include_hidden=self.config.include_hidden)
        for entry in entries:
            if entry.is_dir():
                yield from self._walk(entry)
            elif entry.is_file():
                yield entry

    def _compile_file(
        self, path: Path, source_root: Path, output_root: Path, switcher: str
    ) -> str | None:
        """Copy or render one file; return its output path or None when skipped."""
        relative = path.relative_to(source_root).as_posix()
        extensions = self.config.extensions

        if extensions.is_preserved(path):
            target = output_name(relative, self.config, convert=False)
            force_copy(path, output_root / target)
            logger.debug("Copied %s to %s", relative, target)
            return target

        if not extensions.is_processed(path):
            logger.debug("Skipping %s", relative)
            return None

        target = output_name(relative, self.config, convert=True)
        reverse = reverse_path(target)
        page = self.template.render(
            {
                VERSION_SWITCHER_ELEMENT: switcher,
                CONTENT: self.compile_file(path),
                RELATIVE_BASE_URL: reverse + VENDOR_DIR,
                NAVIGATION_BASE: "",
                VERSION_SWITCH_BASE: reverse,
                VERSION_SWITCH_FILE: f"/{quote(target)}",
            }
        )
        force_write(output_root / target, page)
        logger.debug("Rendered %s to %s", relative, target)
        return target


def _is_readable_directory(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)


__all__ = ["CompilationError", "Compiler"]
