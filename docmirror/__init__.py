"""Compile versioned markdown documentation into static HTML mirrors.

This package exposes the CLI entry points used by the ``docmirror`` console
script, which loads each published version of a project's docs and writes a
navigable HTML tree per version.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docmirror import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
