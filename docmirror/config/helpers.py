"""Utility helpers shared by the docmirror configuration loader."""

from __future__ import annotations

import os
import typing as typ

from .models import SiteConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_PROCESSED_EXTENSIONS = ("md",)
DEFAULT_PRESERVED_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg")
DEFAULT_FILE_MAPPING = {"index.md": "index.html"}
KNOWN_HANDLERS = ("local", "github")
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _section(
    raw: cabc.Mapping[str, typ.Any], key: str
) -> cabc.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"Configuration section '{key}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _string_list(value: object | None) -> list[str]:
    """Normalize a scalar or sequence into a list of non-empty strings."""
    match value:
        case None:
            return []
        case str() as text:
            return [segment for segment in text.replace(",", " ").split() if segment]
        case list() | tuple():
            return [text for text in (str(item).strip() for item in value) if text]
        case _:
            return [str(value)]


def _mapping_pairs(value: object | None) -> list[tuple[str, str]]:
    """Return ordered (source, target) pairs from a mapping or list of pairs."""
    match value:
        case None:
            return list(DEFAULT_FILE_MAPPING.items())
        case dict():
            return [(str(source), str(target)) for source, target in value.items()]
        case list():
            pairs: list[tuple[str, str]] = []
            for item in value:
                match item:
                    case dict():
                        pairs.extend((str(k), str(v)) for k, v in item.items())
                    case [source, target]:
                        pairs.append((str(source), str(target)))
                    case _:
                        msg = f"Unsupported file mapping entry: {item!r}"
                        raise SiteConfigError(msg)
            return pairs
        case _:
            msg = "File mapping must be a mapping or a list of pairs."
            raise SiteConfigError(msg)


def _resolve_handler(value: object | None) -> str:
    handler = (_optional_str(value) or "local").lower()
    if handler not in KNOWN_HANDLERS:
        known = ", ".join(KNOWN_HANDLERS)
        msg = f"Unknown loader handler '{handler}'. Known handlers: {known}"
        raise SiteConfigError(msg)
    return handler


def _resolve_token(value: object | None) -> str | None:
    """Return the configured token or the first token found in the environment."""
    token = _optional_str(value)
    if token:
        return token
    for name in TOKEN_ENV_VARS:
        token = _optional_str(os.getenv(name))
        if token:
            return token
    return None


__all__ = [
    "DEFAULT_FILE_MAPPING",
    "DEFAULT_PRESERVED_EXTENSIONS",
    "DEFAULT_PROCESSED_EXTENSIONS",
    "KNOWN_HANDLERS",
    "_mapping_pairs",
    "_optional_str",
    "_resolve_handler",
    "_resolve_token",
    "_section",
    "_string_list",
]
