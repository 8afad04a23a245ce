"""Run pre-compilers, the markdown converter, and post-compilers in order.

Stages share one capability, ``transform(text) -> text``. The pipeline never
inspects what a stage does; :func:`build_pipeline` decides which stages a
project gets from its configuration.

Example
-------
>>> from docmirror.compiler.pipeline import Pipeline
>>> from docmirror.compiler.renderer import MarkdownConverter
>>> pipeline = Pipeline(MarkdownConverter())
>>> pipeline.compile("# Title")
'<h1 id="title">Title</h1>'
"""

from __future__ import annotations

import logging
import typing as typ

from .postcompilers import UsabilityPostCompiler
from .precompilers import GithubLinkPreCompiler
from .renderer import MarkdownConverter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docmirror.config import CompilerConfig

    from .models import Heading

logger = logging.getLogger(__name__)


@typ.runtime_checkable
class PipelineStage(typ.Protocol):
    """A text-to-text transform run before or after markdown conversion."""

    def transform(self, text: str) -> str:
        """Return the transformed ``text``."""
        ...


class Pipeline:
    """Apply ordered pre-stages, conversion, and ordered post-stages."""

    def __init__(
        self,
        converter: MarkdownConverter,
        *,
        pre_compilers: cabc.Iterable[PipelineStage] = (),
        post_compilers: cabc.Iterable[PipelineStage] = (),
    ) -> None:
        self.converter = converter
        self.pre_compilers: tuple[PipelineStage, ...] = tuple(pre_compilers)
        self.post_compilers: tuple[PipelineStage, ...] = tuple(post_compilers)

    def precompile(self, text: str) -> str:
        """Run every pre-compiler over raw source text."""
        for stage in self.pre_compilers:
            text = stage.transform(text)
        return text

    def postcompile(self, html: str) -> str:
        """Run every post-compiler over converted HTML."""
        for stage in self.post_compilers:
            html = stage.transform(html)
        return html

    def compile(self, text: str) -> str:
        """Return the final HTML for the markdown source ``text``."""
        return self.postcompile(self.converter.convert(self.precompile(text)))

    def headings(self, text: str, max_level: int) -> list[Heading]:
        """Return the headings the compiled page will carry, up to ``max_level``."""
        return self.converter.headings(self.precompile(text), max_level)


def build_pipeline(config: CompilerConfig, loader_handler: str) -> Pipeline:
    """Assemble the pipeline for a project loaded through ``loader_handler``.

    GitHub sources get the link pre-compiler, which turns repository links
    between markdown files into links between the generated pages. Every
    project gets the usability post-compiler.
    """
    pre_compilers: list[PipelineStage] = []
    if loader_handler == "github":
        pre_compilers.append(
            GithubLinkPreCompiler(config.extensions, config.file_mapping)
        )
    post_compilers: list[PipelineStage] = [
        UsabilityPostCompiler(project_site=config.project_site)
    ]
    logger.debug(
        "Pipeline for %s loader: pre=%s post=%s",
        loader_handler,
        [type(stage).__name__ for stage in pre_compilers],
        [type(stage).__name__ for stage in post_compilers],
    )
    return Pipeline(
        MarkdownConverter(config.pygments_style),
        pre_compilers=pre_compilers,
        post_compilers=post_compilers,
    )


__all__ = ["Pipeline", "PipelineStage", "build_pipeline"]
