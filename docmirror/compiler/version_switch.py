"""Render the version switcher shared by every page of a version."""

from __future__ import annotations

import logging
import typing as typ

from docmirror.files import force_write
from docmirror.template import fragment_environment

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Environment

    from docmirror.loaders import Version

logger = logging.getLogger(__name__)


class VersionSwitchGenerator:
    """List every known version and mark the one being compiled as active.

    Links are left as ``{version-switch-base}<slug>{version-switch-file}`` so
    each page can point at its own counterpart in the other versions.
    """

    def __init__(self, element_id: str, *, env: Environment | None = None) -> None:
        self.element_id = element_id
        self.env = env or fragment_environment()
        self.template = self.env.get_template("version_switcher.html.jinja")

    def render(self, versions: cabc.Sequence[Version], current_version: str) -> str:
        """Return the switcher fragment for ``current_version``."""
        return self.template.render(
            versions=versions,
            current_version=current_version,
            element_id=self.element_id,
        )

    def generate(
        self,
        versions: cabc.Sequence[Version],
        current_version: str,
        output_path: Path,
    ) -> Path:
        """Render the switcher and write it to ``output_path``."""
        force_write(output_path, self.render(versions, current_version))
        logger.debug(
            "Wrote version switcher for %s (%d versions) to %s",
            current_version,
            len(versions),
            output_path,
        )
        return output_path


__all__ = ["VersionSwitchGenerator"]
