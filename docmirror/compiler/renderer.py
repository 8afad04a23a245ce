"""Convert markdown into HTML with highlighted code and stable heading ids."""

from __future__ import annotations

import re
import typing as typ
from html import escape, unescape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from docmirror.files import heading_to_filename

from .models import Heading

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


def _slugify(value: str, separator: str) -> str:  # noqa: ARG001 - toc API
    """Slugify heading text exactly like navigation anchors are built."""
    return heading_to_filename(value)


class MarkdownConverter:
    """Render markdown with consistent styling and heading anchors.

    Heading ids come from :func:`docmirror.files.heading_to_filename` through
    the ``toc`` extension, which also suffixes duplicates (``_1``, ``_2``).
    :meth:`headings` reads those ids from the same conversion, so links built
    from it always match the rendered page.
    """

    def __init__(
        self,
        pygments_style: str = "monokai",
        extensions: cabc.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize a converter with a pygments style and extra extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        extensions : Sequence[Extension | str], optional
            Additional Python-Markdown extensions appended to the defaults.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._extra_extensions = list(extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def convert(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        html, _tokens = self._render(text)
        return html

    def headings(self, text: str, max_level: int) -> list[Heading]:
        """Return the headings of ``text`` whose level is at most ``max_level``.

        Parameters
        ----------
        text : str
            Markdown source of a single document.
        max_level : int
            Deepest heading level to include; ``2`` keeps ``h1`` and ``h2``.

        Returns
        -------
        list[Heading]
            Headings in document order with the ids the rendered page carries.
        """
        _html, tokens = self._render(text)
        return [
            heading for heading in _flatten(tokens) if heading.level <= max_level
        ]

    def _build(self) -> Markdown:
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
            *self._extra_extensions,
        ]
        return Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "toc": {"slugify": _slugify},
            },
        )

    def _render(self, text: str) -> tuple[str, list[dict[str, typ.Any]]]:
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return "", []
        md = self._build()
        html = md.convert(normalized)
        tokens = list(getattr(md, "toc_tokens", []))
        return self._annotate_codehilite(html, normalized), tokens

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _flatten(tokens: cabc.Iterable[dict[str, typ.Any]]) -> cabc.Iterator[Heading]:
    """Yield headings from nested toc tokens in document order."""
    for token in tokens:
        yield Heading(
            anchor=str(token["id"]),
            text=unescape(str(token["name"])),
            level=int(token["level"]),
        )
        yield from _flatten(token.get("children", []))


__all__ = ["CODE_BLOCK_PATTERN", "MarkdownConverter"]
