"""Load and validate the YAML configuration for docmirror builds.

This subpackage parses a project's ``docmirror.yaml``, applies defaults, and
produces the dataclasses (:class:`SiteConfig`, :class:`CompilerConfig`,
:class:`LoaderConfig`) that the compiler and loaders consume. The primary
entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docmirror.config import load_site_config
>>> site = load_site_config(Path("docmirror.yaml"))  # doctest: +SKIP
>>> site.compiler.extensions.processed  # doctest: +SKIP
frozenset({'md'})
"""

from .loader import load_site_config
from .models import (
    CompilerConfig,
    ExtensionPolicy,
    FileMapping,
    LoaderConfig,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "CompilerConfig",
    "ExtensionPolicy",
    "FileMapping",
    "LoaderConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
