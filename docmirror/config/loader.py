"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docmirror._constants import DEFAULT_NAVIGATION_BASE

from .helpers import (
    DEFAULT_PRESERVED_EXTENSIONS,
    DEFAULT_PROCESSED_EXTENSIONS,
    _mapping_pairs,
    _optional_str,
    _resolve_handler,
    _resolve_token,
    _section,
    _string_list,
)
from .models import (
    CompilerConfig,
    ExtensionPolicy,
    FileMapping,
    LoaderConfig,
    SiteConfig,
    SiteConfigError,
)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing one documented project.

    Relative paths inside the file (``build.path``, ``build.template``,
    ``loader.work_dir`` and a local ``loader.source``) are resolved against the
    directory holding the configuration file.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docmirror.yaml``).

    Returns
    -------
    SiteConfig
        Parsed compiler and loader configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing or the values are inconsistent (for
        example, overlapping extension sets or no index file mapping).

    Examples
    --------
    >>> from pathlib import Path
    >>> from docmirror.config import load_site_config
    >>> config = load_site_config(Path("docmirror.yaml"))  # doctest: +SKIP
    >>> config.compiler.project_name  # doctest: +SKIP
    'appserver'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    return SiteConfig(
        compiler=_build_compiler_config(raw, base_dir),
        loader=_build_loader_config(_section(raw, "loader"), base_dir),
    )


def _resolve_path(value: object, base_dir: Path) -> Path:
    candidate = Path(str(value)).expanduser()
    return candidate if candidate.is_absolute() else base_dir / candidate


def _build_compiler_config(
    raw: typ.Mapping[str, typ.Any], base_dir: Path
) -> CompilerConfig:
    """Build the CompilerConfig from the project, build and navigation sections."""
    project = _section(raw, "project")
    build = _section(raw, "build")
    extensions = _section(raw, "extensions")
    navigation = _section(raw, "navigation")
    version_switcher = _section(raw, "version_switcher")

    project_name = _optional_str(project.get("name"))
    if not project_name:
        msg = "Configuration is missing 'project.name'."
        raise SiteConfigError(msg)

    template = build.get("template")
    processed = extensions.get("processed", DEFAULT_PROCESSED_EXTENSIONS)
    preserved = extensions.get("preserved", DEFAULT_PRESERVED_EXTENSIONS)

    try:
        depth = int(navigation.get("heading_depth", 2))
    except (TypeError, ValueError) as exc:
        msg = "'navigation.heading_depth' must be an integer."
        raise SiteConfigError(msg) from exc

    return CompilerConfig(
        project_name=project_name,
        build_path=_resolve_path(build.get("path", "build"), base_dir),
        extensions=ExtensionPolicy.from_iterables(
            _string_list(processed), _string_list(preserved)
        ),
        file_mapping=FileMapping(tuple(_mapping_pairs(raw.get("file_mapping")))),
        index_file_name=navigation.get("index_file_name", "index.html"),
        navigation_file_name=navigation.get("file_name", "navigation"),
        version_switcher_file_name=version_switcher.get(
            "file_name", "version-switcher"
        ),
        navigation_base=str(navigation.get("base") or DEFAULT_NAVIGATION_BASE),
        navigation_heading_depth=depth,
        project_site=str(project.get("site") or ""),
        template_path=_resolve_path(template, base_dir) if template else None,
        pygments_style=build.get("pygments_style", "monokai"),
        include_hidden=bool(build.get("include_hidden", False)),
    )


def _build_loader_config(
    payload: typ.Mapping[str, typ.Any], base_dir: Path
) -> LoaderConfig:
    """Build the LoaderConfig, resolving local sources against ``base_dir``."""
    handler = _resolve_handler(payload.get("handler"))
    source = _optional_str(payload.get("source"))
    if not source:
        msg = "Configuration is missing 'loader.source'."
        raise SiteConfigError(msg)
    if handler == "local":
        source = str(_resolve_path(source, base_dir))
    work_dir = payload.get("work_dir")

    return LoaderConfig(
        handler=handler,
        source=source,
        docs_path=str(payload.get("docs_path") or "").strip("/"),
        versions=_string_list(payload.get("versions")),
        branches=_string_list(payload.get("branches")),
        token=_resolve_token(payload.get("token")) if handler == "github" else None,
        api_base=str(payload.get("api_base") or "https://api.github.com"),
        work_dir=_resolve_path(work_dir, base_dir) if work_dir else None,
    )


__all__ = ["load_site_config"]
