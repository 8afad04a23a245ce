"""Build the navigation sidebar for one version of a source tree.

The sidebar mirrors the directory hierarchy: every directory becomes a
collapsible entry linking to its index page, every processed document becomes
a leaf listing its headings. The document that serves as a directory's index
is represented by the directory entry and is not repeated as a leaf.

Example
-------
>>> from pathlib import Path
>>> from docmirror.compiler.navigation import NavigationGenerator
>>> generator = NavigationGenerator(config, pipeline)  # doctest: +SKIP
>>> generator.generate(Path("src/1.0"), Path("build/demo/1.0/navigation.html"))  # doctest: +SKIP
'<nav>...'
"""

from __future__ import annotations

import logging
import posixpath
import typing as typ
from urllib.parse import quote

from docmirror.files import filename_to_heading, force_write, sorted_entries
from docmirror.template import fragment_environment

from .models import NavigationNode
from .paths import output_name, read_source

if typ.TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from docmirror.config import CompilerConfig

    from .pipeline import Pipeline

logger = logging.getLogger(__name__)


class NavigationGenerator:
    """Walk a source tree and render it as nested navigation lists."""

    def __init__(
        self,
        config: CompilerConfig,
        pipeline: Pipeline,
        *,
        env: Environment | None = None,
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        config : CompilerConfig
            Supplies extensions, file mapping, index name and heading depth.
        pipeline : Pipeline
            Pipeline whose pre-compilers and converter produce the heading ids,
            so navigation anchors match the compiled pages.
        env : Environment, optional
            Jinja environment holding ``navigation.html.jinja``; defaults to the
            bundled templates.
        """
        self.config = config
        self.pipeline = pipeline
        self.env = env or fragment_environment()
        self.template = self.env.get_template("navigation.html.jinja")

    def generate(self, source_root: Path, output_path: Path, base: str = "") -> str:
        """Render the navigation for ``source_root`` and persist it.

        Parameters
        ----------
        source_root : Path
            Root directory of the raw documentation for one version.
        output_path : Path
            File the fragment is written to.
        base : str, optional
            Prefix of every link, usually
            :meth:`CompilerConfig.navigation_root` for the compiled version.

        Returns
        -------
        str
            The rendered ``<nav>`` fragment.
        """
        nodes = self.build(source_root, base)
        fragment = self.render(nodes)
        force_write(output_path, fragment)
        logger.debug(
            "Wrote navigation with %d top-level entries to %s", len(nodes), output_path
        )
        return fragment

    def render(self, nodes: list[NavigationNode]) -> str:
        """Render ``nodes`` into the navigation fragment."""
        return self.template.render(nodes=nodes)

    def build(self, source_root: Path, base: str = "") -> list[NavigationNode]:
        """Return the navigation tree for ``source_root``.

        Link paths are percent-encoded before ``base`` is prefixed.
        """
        index_source = self.config.mapped_index_file
        return self._collect(source_root, "", base, index_source)

    def _collect(
        self, directory: Path, node_path: str, base: str, index_source: str
    ) -> list[NavigationNode]:
        """Return the entries of ``directory``; ``node_path`` is never mutated."""
        nodes: list[NavigationNode] = []
        entries = sorted_entries(directory, include_hidden=self.config.include_hidden)
        for entry in entries:
            relative = posixpath.join(node_path, entry.name) if node_path else entry.name
            if entry.is_dir():
                mapped_dir = self.config.file_mapping.apply(relative)
                index_page = f"{mapped_dir}/{self.config.index_file_name}"
                nodes.append(
                    NavigationNode(
                        label=filename_to_heading(entry.name),
                        link=base + quote(index_page),
                        key=entry.name,
                        is_directory=True,
                        children=self._collect(entry, relative, base, index_source),
                    )
                )
            elif entry.is_file() and self.config.extensions.is_processed(entry):
                if entry.name == index_source:
                    continue
                nodes.append(self._leaf(entry, relative, base))
        return nodes

    def _leaf(self, document: Path, relative: str, base: str) -> NavigationNode:
        headings = self.pipeline.headings(
            read_source(document), self.config.navigation_heading_depth
        )
        return NavigationNode(
            label=filename_to_heading(document.name),
            link=base + quote(output_name(relative, self.config, convert=True)),
            key=document.name.split(".", 1)[0],
            headings=headings,
        )


__all__ = ["NavigationGenerator"]
