"""Unit tests for the conversion pipeline and its pre/post compilers."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

from bs4 import BeautifulSoup

from docmirror.compiler import (
    GithubLinkPreCompiler,
    MarkdownConverter,
    Pipeline,
    UsabilityPostCompiler,
    build_pipeline,
)
from docmirror.config import ExtensionPolicy, FileMapping

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docmirror.config import CompilerConfig


def _link_compiler(mapping: dict[str, str] | None = None) -> GithubLinkPreCompiler:
    return GithubLinkPreCompiler(
        ExtensionPolicy.from_iterables(["md"], ["png"]),
        FileMapping.from_mapping(mapping or {"index.md": "index.html"}),
    )


def test_link_precompiler_rewrites_document_links() -> None:
    """Links to markdown files point at the compiled pages."""
    text = dedent(
        """\
        See [Install](setup/install.md#linux) and [Home](README.md?x=1).
        Also [upstream](https://github.com/octo/widgets/blob/main/a.md).
        ![logo](images/logo.png) [top](#top)

        [ref]: ../docs/index.md
        """
    )

    rewritten = _link_compiler({"README.md": "index.html"}).transform(text)

    assert "[Install](setup/install.html#linux)" in rewritten
    assert "[Home](index.html?x=1)" in rewritten
    assert "(https://github.com/octo/widgets/blob/main/a.md)" in rewritten, (
        "external links must stay untouched"
    )
    assert "![logo](images/logo.png)" in rewritten
    assert "[top](#top)" in rewritten
    assert "[ref]: ../docs/index.html" in rewritten


def test_link_precompiler_leaves_fenced_code_alone() -> None:
    """Links shown inside code samples are not rewritten."""
    text = "```markdown\n[guide](guide.md)\n```\n\n[guide](guide.md)\n"

    rewritten = _link_compiler().transform(text)

    assert rewritten == "```markdown\n[guide](guide.md)\n```\n\n[guide](guide.html)\n"


def test_usability_postcompiler_adjusts_headings_links_and_tables() -> None:
    """Bare headings get ids, external links open new tabs, tables scroll."""
    html = (
        "<h2>Raw Heading</h2>"
        '<p><a href="https://elsewhere.org/x">out</a> '
        '<a href="https://example.com/docs">home</a> '
        '<a href="guide.html">in</a></p>'
        "<table><tr><td>1</td></tr></table>"
    )

    result = UsabilityPostCompiler(project_site="https://example.com/").transform(html)
    soup = BeautifulSoup(result, "html.parser")

    assert soup.h2["id"] == "raw-heading"
    links = {a.get_text(): a for a in soup.find_all("a")}
    assert links["out"].get("target") == "_blank"
    assert links["out"].get("rel") == ["noopener", "noreferrer"]
    assert links["home"].get("target") is None, "project links stay in the tab"
    assert links["in"].get("target") is None
    wrapper = soup.find("div", class_="table-responsive")
    assert wrapper is not None and wrapper.table is not None


def test_usability_postcompiler_keeps_existing_ids() -> None:
    """Headings rendered from markdown already carry ids and are untouched."""
    html = '<h1 id="intro">Intro</h1>'

    assert UsabilityPostCompiler().transform(html) == html


def test_converter_highlights_code_and_labels_language() -> None:
    """Fenced blocks become codehilite blocks with a data-language attribute."""
    html = MarkdownConverter().convert("```python\nprint('hi')\n```\n")

    soup = BeautifulSoup(html, "html.parser")
    block = soup.find("div", class_="codehilite")
    assert block is not None, "expected a highlighted block"
    assert block["data-language"] == "python"


def test_converter_headings_match_rendered_ids() -> None:
    """Heading anchors equal the ids in the converted page, duplicates included."""
    converter = MarkdownConverter()
    text = "# Getting Started\n\n## Setup\n\n### Deep\n\n## Setup\n"

    headings = converter.headings(text, 2)
    soup = BeautifulSoup(converter.convert(text), "html.parser")

    assert [h.anchor for h in headings] == ["getting-started", "setup", "setup_1"]
    assert [h.level for h in headings] == [1, 2, 2]
    for heading in headings:
        assert soup.find(id=heading.anchor) is not None, (
            f"missing rendered id {heading.anchor!r}"
        )


def test_converter_returns_empty_for_blank_input() -> None:
    """Blank documents convert to an empty body."""
    assert MarkdownConverter().convert("   \n") == ""
    assert MarkdownConverter().headings("", 2) == []


def test_pipeline_runs_stages_in_order() -> None:
    """Pre-compilers see markdown, post-compilers see HTML, in given order."""

    class Append:
        def __init__(self, suffix: str) -> None:
            self.suffix = suffix

        def transform(self, text: str) -> str:
            return text + self.suffix

    pipeline = Pipeline(
        MarkdownConverter(),
        pre_compilers=[Append("\n\nfirst"), Append(" second")],
        post_compilers=[Append("<!--a-->"), Append("<!--b-->")],
    )

    html = pipeline.compile("# Title")

    assert "<p>first second</p>" in html
    assert html.endswith("<!--a--><!--b-->")


def test_build_pipeline_selects_stages_per_loader(
    make_config: cabc.Callable[..., CompilerConfig],
) -> None:
    """Only GitHub sources get the link pre-compiler."""
    config = make_config(project_site="https://example.com")

    github = build_pipeline(config, "github")
    local = build_pipeline(config, "local")

    assert [type(s) for s in github.pre_compilers] == [GithubLinkPreCompiler]
    assert local.pre_compilers == ()
    for pipeline in (github, local):
        assert [type(s) for s in pipeline.post_compilers] == [UsabilityPostCompiler]
