"""Loaders that materialize one raw documentation tree per version."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .github import DEFAULT_API_BASE, GitHubLoader
from .local import LocalLoader
from .models import Loader, LoaderError, Version, ordered_versions, version_sort_key

if typ.TYPE_CHECKING:
    from docmirror.config import LoaderConfig


def create_loader(config: LoaderConfig) -> Loader:
    """Return the loader registered for ``config.handler``."""
    match config.handler:
        case "local":
            return LocalLoader(
                Path(config.source),
                docs_path=config.docs_path,
                versions=config.versions,
            )
        case "github":
            return GitHubLoader(
                config.source,
                docs_path=config.docs_path,
                versions=config.versions,
                branches=config.branches,
                token=config.token,
                api_base=config.api_base,
                work_dir=config.work_dir,
            )
        case _:
            msg = f"No loader is registered for handler '{config.handler}'."
            raise LoaderError(msg)


__all__ = [
    "DEFAULT_API_BASE",
    "GitHubLoader",
    "Loader",
    "LoaderError",
    "LocalLoader",
    "Version",
    "create_loader",
    "ordered_versions",
    "version_sort_key",
]
