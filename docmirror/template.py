"""Fill the page skeleton with global and per-page placeholder values.

Placeholders are literal tokens such as ``{content}``. Values handed to
:meth:`PageTemplate.fill_global` are written into the skeleton once per
compile run; values handed to :meth:`PageTemplate.render` only exist for the
duration of that call, so one page can never leak into the next.

Tokens found inside an inserted value are resolved from the same scope (the
version switcher fragment carries ``{version-switch-base}`` links, for
example). Values listed as *verbatim* are inserted untouched.

Examples
--------
>>> template = PageTemplate("<nav>{navigation-element}</nav><main>{content}</main>")
>>> template.fill_global({"{navigation-element}": "<a href='{navigation-base}x'>x</a>"})
>>> template.render({"{navigation-base}": "/", "{content}": "<p>hi</p>"})
"<nav><a href='/x'>x</a></nav><main><p>hi</p></main>"
"""

from __future__ import annotations

import collections
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from ._constants import CONTENT, PLACEHOLDERS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = TEMPLATES_DIR / "page.html"
MAX_NESTING = 4
KNOWN_TOKEN_PATTERN = re.compile("|".join(re.escape(token) for token in PLACEHOLDERS))


class PageTemplate:
    """HTML skeleton with a compile-run scope and a per-page scope."""

    def __init__(
        self, skeleton: str, *, verbatim: cabc.Iterable[str] = (CONTENT,)
    ) -> None:
        """Initialize the template from its raw skeleton text.

        Parameters
        ----------
        skeleton : str
            HTML containing placeholder tokens.
        verbatim : Iterable[str], optional
            Tokens whose values are inserted without resolving nested tokens.
            Defaults to ``("{content}",)`` so document text is never rewritten.
        """
        self._skeleton = skeleton
        self._base = skeleton
        self._global: dict[str, str] = {}
        self._verbatim = frozenset(verbatim)

    @classmethod
    def from_path(cls, path: Path | None = None) -> PageTemplate:
        """Read a skeleton from ``path`` or fall back to the bundled template."""
        source = path or DEFAULT_TEMPLATE
        return cls(source.read_text(encoding="utf-8"))

    @property
    def global_values(self) -> dict[str, str]:
        """Return a copy of the compile-run scoped values."""
        return dict(self._global)

    def fill_global(self, values: cabc.Mapping[str, str]) -> None:
        """Resolve ``values`` in the skeleton for every page rendered afterwards."""
        self._global.update(values)
        self._base = self._substitute(self._base, dict(values), 0)

    def reset(self) -> None:
        """Drop every global value and return to the raw skeleton."""
        self._global.clear()
        self._base = self._skeleton

    def render(self, values: cabc.Mapping[str, str]) -> str:
        """Return the page produced by filling ``values`` into the template.

        The page scope is layered over the global scope for nested lookups and
        discarded when the call returns.
        """
        scope = collections.ChainMap(dict(values), self._global)
        return self._substitute(self._base, scope, 0)

    def _substitute(
        self, text: str, scope: cabc.Mapping[str, str], depth: int
    ) -> str:
        if not scope:
            return text
        tokens = sorted(scope, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(token) for token in tokens))

        def _repl(match: re.Match[str]) -> str:
            token = match.group(0)
            value = scope[token]
            if token in self._verbatim or depth >= MAX_NESTING:
                return value
            return self._substitute(value, scope, depth + 1)

        return pattern.sub(_repl, text)


def literal_braces(value: object) -> Markup:
    """HTML-escape ``value`` and encode its braces as character references.

    Fragments are pasted into the page skeleton before placeholders are
    resolved, so document-supplied text such as a heading reading
    ``{content}`` must not look like a token.

    Examples
    --------
    >>> literal_braces("The {content} <token>")
    Markup('The &#123;content&#125; &lt;token&gt;')
    """
    text = str(escape(value))
    return Markup(text.replace("{", "&#123;").replace("}", "&#125;"))


def fragment_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja environment used to render HTML fragments.

    Templates pipe document and version text through the ``literal_braces``
    filter; only the tokens written in the templates themselves survive.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(["html.jinja", "html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["literal_braces"] = literal_braces
    return env


def unresolved_placeholders(text: str) -> list[str]:
    """Return the known placeholder tokens still present in ``text``."""
    return sorted(set(KNOWN_TOKEN_PATTERN.findall(text)))


__all__ = [
    "DEFAULT_TEMPLATE",
    "TEMPLATES_DIR",
    "PageTemplate",
    "fragment_environment",
    "literal_braces",
    "unresolved_placeholders",
]
