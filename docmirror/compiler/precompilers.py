"""Pre-compilers that rewrite raw markdown before conversion."""

from __future__ import annotations

import posixpath
import re
import typing as typ
from urllib.parse import urlsplit, urlunsplit

from docmirror._constants import HTML_EXTENSION

if typ.TYPE_CHECKING:
    from docmirror.config import ExtensionPolicy, FileMapping

FENCED_BLOCK_PATTERN = re.compile(r"^(```|~~~).*?^\1[ \t]*$", re.DOTALL | re.MULTILINE)
INLINE_LINK_PATTERN = re.compile(r"(?P<prefix>!?\[[^\]\n]*\]\(\s*<?)(?P<target>[^)\s>]+)")
REFERENCE_LINK_PATTERN = re.compile(
    r"^(?P<prefix>[ ]{0,3}\[[^\]\n]+\]:[ \t]*<?)(?P<target>[^\s>]+)", re.MULTILINE
)
_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


class GithubLinkPreCompiler:
    """Point repository-relative markdown links at the generated HTML pages.

    Documentation hosted on GitHub links between files the way GitHub renders
    them (``[Install](setup/install.md#linux)``). Once compiled those targets
    no longer exist, so links to processed documents are renamed with the same
    file mapping and extension rules the compiler applies to output paths.
    Fenced code blocks are left untouched.
    """

    def __init__(self, extensions: ExtensionPolicy, file_mapping: FileMapping) -> None:
        self.extensions = extensions
        self.file_mapping = file_mapping

    def transform(self, text: str) -> str:
        """Return ``text`` with links to markdown documents rewritten."""
        pieces: list[str] = []
        cursor = 0
        for block in FENCED_BLOCK_PATTERN.finditer(text):
            pieces.append(self._rewrite_links(text[cursor : block.start()]))
            pieces.append(block.group(0))
            cursor = block.end()
        pieces.append(self._rewrite_links(text[cursor:]))
        return "".join(pieces)

    def _rewrite_links(self, chunk: str) -> str:
        def _repl(match: re.Match[str]) -> str:
            rewritten = self._rewrite(match.group("target"))
            return match.group("prefix") + (rewritten or match.group("target"))

        chunk = INLINE_LINK_PATTERN.sub(_repl, chunk)
        return REFERENCE_LINK_PATTERN.sub(_repl, chunk)

    def _rewrite(self, target: str) -> str | None:
        """Return the compiled link for ``target``, or None when it stays as is."""
        lower = target.lower()
        if lower.startswith(_EXTERNAL_PREFIXES) or target.startswith(("#", "//", "/")):
            return None
        if "://" in target:
            return None

        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or not parsed.path:
            return None

        extension = posixpath.splitext(parsed.path)[1].lstrip(".").lower()
        if extension not in self.extensions.processed:
            return None

        mapped = self.file_mapping.apply(parsed.path)
        stem, mapped_extension = posixpath.splitext(mapped)
        if mapped_extension.lstrip(".").lower() in self.extensions.processed:
            mapped = f"{stem}.{HTML_EXTENSION}"
        return urlunsplit(("", "", mapped, parsed.query, parsed.fragment))


__all__ = ["GithubLinkPreCompiler"]
