"""Cyclopts CLI entrypoint for compiling versioned documentation mirrors.

The ``docmirror`` console script reads a ``docmirror.yaml`` site
configuration, asks the configured loader for every published version, and
compiles each one into ``<build>/<project>/<version>/``.

Examples
--------
Compile every version:

>>> from docmirror.cli import main
>>> main()  # doctest: +SKIP

Recompile a single version from scratch with debug logging:

>>> from docmirror.cli import app
>>> app(["build", "--version", "2.0", "--clean", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import DocumentationBuilder
from .config import load_site_config
from .loaders import create_loader

DEFAULT_CONFIG = Path("docmirror.yaml")

app = App(name="docmirror", config=cyclopts.config.Env("DOCMIRROR_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Compile every documentation version into static HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="DOCMIRROR_CONFIG")
    ] = DEFAULT_CONFIG,
    version: typ.Annotated[
        list[str] | None,
        Parameter(help="Only compile these versions (repeatable)"),
    ] = None,
    clean: typ.Annotated[
        bool, Parameter(help="Delete the project's previous output first")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log every file")] = False,
) -> None:
    """Compile the configured project's versions.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docmirror.yaml`` configuration file (overridable via
        ``DOCMIRROR_CONFIG``).
    version : list[str] or None, optional
        Version names to compile; all versions when ``None``. The version
        switcher always lists every version.
    clean : bool, optional
        Remove ``<build>/<project>`` before compiling.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    SystemExit
        With status ``1`` when any version's source tree was unreadable.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    builder = DocumentationBuilder(site_config)
    report = builder.run(only=version, clean=clean)

    for path in report.assets:
        print(f"wrote {_format_path(path)}")
    for name in report.compiled:
        output = site_config.compiler.output_root(builder.target_base, name)
        print(f"wrote {_format_path(output)}")
    if report.failed:
        for name in report.failed:
            print(f"failed {name}: source tree unavailable", file=sys.stderr)
        raise SystemExit(1)


@app.command(help="List the versions the configured loader would compile.")
def versions(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="DOCMIRROR_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print one version name per line, in version switcher order."""
    site_config = load_site_config(config)
    for known in create_loader(site_config.loader).versions():
        print(known.name)


def main() -> None:
    """Invoke the Cyclopts application behind the ``docmirror`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
