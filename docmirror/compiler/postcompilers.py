"""Post-compilers that polish converted HTML before it enters the template."""

from __future__ import annotations

import re
from html import escape, unescape

from docmirror.files import heading_to_filename

BARE_HEADING_PATTERN = re.compile(r"<h([1-6])>(.*?)</h\1>", re.DOTALL)
ANCHOR_OPEN_TAG = re.compile(r"<a\s([^>]*)>")
HREF_ATTRIBUTE = re.compile(r'\bhref="([^"]*)"')
TAG_PATTERN = re.compile(r"<[^>]+>")
TABLE_OPEN_TAG = re.compile(r"<table(\s[^>]*)?>")
TABLE_CLOSE_TAG = "</table>"
TABLE_WRAPPER = '<div class="table-responsive">'


class UsabilityPostCompiler:
    """Add reader affordances to converted documents.

    * headings without an ``id`` (raw HTML in the source) get one, so every
      heading can be linked to;
    * links leaving the project open in a new tab;
    * tables are wrapped in a horizontally scrollable container.
    """

    def __init__(self, project_site: str = "") -> None:
        self.project_site = project_site.rstrip("/")

    def transform(self, text: str) -> str:
        """Return ``text`` with headings, links, and tables adjusted."""
        text = BARE_HEADING_PATTERN.sub(self._identify_heading, text)
        text = ANCHOR_OPEN_TAG.sub(self._mark_external_link, text)
        return self._wrap_tables(text)

    @staticmethod
    def _identify_heading(match: re.Match[str]) -> str:
        level, inner = match.groups()
        plain = unescape(TAG_PATTERN.sub("", inner)).strip()
        if not plain:
            return match.group(0)
        anchor = escape(heading_to_filename(plain), quote=True)
        return f'<h{level} id="{anchor}">{inner}</h{level}>'

    def _mark_external_link(self, match: re.Match[str]) -> str:
        attributes = match.group(1)
        href = HREF_ATTRIBUTE.search(attributes)
        if href is None or "target=" in attributes:
            return match.group(0)
        target = href.group(1)
        if not target.startswith(("http://", "https://", "//")):
            return match.group(0)
        if self.project_site and target.startswith(self.project_site):
            return match.group(0)
        return f'<a {attributes} target="_blank" rel="noopener noreferrer">'

    @staticmethod
    def _wrap_tables(text: str) -> str:
        if TABLE_CLOSE_TAG not in text:
            return text
        text = TABLE_OPEN_TAG.sub(lambda m: TABLE_WRAPPER + m.group(0), text)
        return text.replace(TABLE_CLOSE_TAG, TABLE_CLOSE_TAG + "</div>")


__all__ = ["UsabilityPostCompiler"]
