"""Drive a loader and the compiler over every published version.

The builder publishes the shared ``vendor/`` assets once, then materializes
and compiles each version. A version whose source tree is unreadable is
recorded as failed and the remaining versions still compile.

Example
-------
>>> from docmirror.builder import DocumentationBuilder
>>> from docmirror.config import load_site_config
>>> report = DocumentationBuilder(load_site_config("docmirror.yaml")).run()  # doctest: +SKIP
>>> report.failed  # doctest: +SKIP
[]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import VENDOR_DIR
from .compiler import Compiler, build_pipeline
from .files import force_write, recursive_copy, recursive_delete
from .loaders import LoaderError, create_loader
from .template import TEMPLATES_DIR

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import SiteConfig
    from .loaders import Loader, Version

logger = logging.getLogger(__name__)

CODEHILITE_STYLESHEET = "codehilite.css"


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of one build run."""

    compiled: list[str] = dc.field(default_factory=list)
    failed: list[str] = dc.field(default_factory=list)
    assets: list[Path] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class DocumentationBuilder:
    """Compile every version a loader provides into the build directory."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        loader: Loader | None = None,
        compiler: Compiler | None = None,
    ) -> None:
        self.site = site
        self.loader = loader or create_loader(site.loader)
        self.compiler = compiler or Compiler(
            site.compiler,
            pipeline=build_pipeline(site.compiler, site.loader.handler),
        )

    @property
    def target_base(self) -> str:
        return self.site.compiler.project_name

    @property
    def project_root(self) -> Path:
        """Directory holding every version and the shared vendor assets."""
        return self.site.compiler.build_path / self.target_base

    def run(
        self, *, only: cabc.Sequence[str] | None = None, clean: bool = False
    ) -> BuildReport:
        """Compile the selected versions and return what happened.

        Parameters
        ----------
        only : Sequence[str], optional
            Names of the versions to compile; every version when omitted. The
            version switcher still lists all versions.
        clean : bool, optional
            Remove the project's previous output before compiling.

        Returns
        -------
        BuildReport
            Compiled and failed version names plus the published assets.

        Raises
        ------
        LoaderError
            When versions cannot be listed, a requested version is unknown, or
            a version cannot be fetched.
        CompilationError
            When writing the output tree fails.
        """
        versions = self.loader.versions()
        selected = _select(versions, only)
        if clean:
            logger.info("Removing previous output at %s", self.project_root)
            recursive_delete(self.project_root)

        report = BuildReport(assets=self.publish_assets())
        try:
            for version in selected:
                if self.compile_version(version, versions):
                    report.compiled.append(version.name)
                else:
                    report.failed.append(version.name)
        finally:
            self.loader.cleanup()
        return report

    def compile_version(
        self, version: Version, versions: cabc.Sequence[Version]
    ) -> bool:
        """Materialize and compile a single version."""
        root = self.loader.doc_by_version(version)
        modifier = self.loader.system_path_modifier().strip("/")
        source = root / modifier if modifier else root
        compiled = self.compiler.compile(
            source, self.target_base, version.name, versions
        )
        if not compiled:
            logger.warning("Version %s could not be compiled", version.name)
        return compiled

    def publish_assets(self) -> list[Path]:
        """Copy the template's vendor assets and write the code stylesheet."""
        vendor = self.project_root / VENDOR_DIR
        template_path = self.site.compiler.template_path
        assets_dir = (template_path.parent if template_path else TEMPLATES_DIR) / (
            VENDOR_DIR
        )
        written: list[Path] = []
        if recursive_copy(assets_dir, vendor):
            written.append(vendor)
        else:
            logger.debug("No vendor assets found at %s", assets_dir)
        stylesheet = self.compiler.pipeline.converter.stylesheet
        written.append(force_write(vendor / CODEHILITE_STYLESHEET, stylesheet))
        return written


def _select(
    versions: cabc.Sequence[Version], only: cabc.Sequence[str] | None
) -> list[Version]:
    if not only:
        return list(versions)
    by_name = {version.name: version for version in versions}
    if unknown := [name for name in only if name not in by_name]:
        msg = f"Unknown versions: {', '.join(unknown)}"
        raise LoaderError(msg)
    return [by_name[name] for name in only]


__all__ = ["CODEHILITE_STYLESHEET", "BuildReport", "DocumentationBuilder"]
