"""Behaviour tests for compiling one documentation version.

The scenario in ``compile_documentation.feature`` compiles the shared sample
tree from ``tests/conftest.py`` and checks the mirrored output: converted
pages, a byte-identical image, and a sidebar whose heading links resolve to
ids on the linked page.

Usage
-----
Run ``pytest tests/bdd/test_compile_documentation.py -v`` after installing the
test extra (``pip install -e .[test]``).
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from docmirror.compiler import Compiler
from docmirror.loaders import Version

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docmirror.config import CompilerConfig

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "compile_documentation.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a documentation tree with a docs index, a guide, and a logo")
def given_tree(
    tmp_path: Path,
    tree_writer: cabc.Callable[[Path], Path],
    scenario_state: ScenarioState,
) -> None:
    """Write the sample tree and remember where it lives."""
    scenario_state["source"] = tree_writer(tmp_path / "raw")


@when(parsers.parse('I compile it as version "{version}" of project "{project}"'))
def when_compile(
    version: str,
    project: str,
    make_config: cabc.Callable[..., CompilerConfig],
    scenario_state: ScenarioState,
) -> None:
    """Compile the tree and record the output root."""
    config = make_config(project_name=project)
    compiled = Compiler(config).compile(
        scenario_state["source"], project, version, [Version(version)]
    )
    assert compiled, "expected the sample tree to compile"
    scenario_state["output"] = config.output_root(project, version)


@then(
    'the compiled tree contains "docs/index.html", "docs/guide.html" '
    'and "images/logo.png"'
)
def then_tree_contains(scenario_state: ScenarioState) -> None:
    """The expected mirrored files exist."""
    output: Path = scenario_state["output"]
    for relative in ("docs/index.html", "docs/guide.html", "images/logo.png"):
        assert (output / relative).is_file(), f"missing {relative}"
    assert not (output / "docs" / "guide.md").exists(), "sources are not copied"


@then("the logo is byte-identical to its source")
def then_logo_identical(scenario_state: ScenarioState) -> None:
    """Preserved assets keep their bytes."""
    source: Path = scenario_state["source"]
    output: Path = scenario_state["output"]
    assert (output / "images" / "logo.png").read_bytes() == (
        source / "images" / "logo.png"
    ).read_bytes()


@then("the navigation lists the guide under docs but not the index")
def then_navigation_lists_guide(scenario_state: ScenarioState) -> None:
    """The docs entry holds the guide leaf and no index leaf."""
    output: Path = scenario_state["output"]
    soup = BeautifulSoup(
        (output / "navigation.html").read_text(encoding="utf-8"), "html.parser"
    )
    docs = soup.find("li", attrs={"node": "docs"})
    assert docs is not None, "docs directory missing from navigation"
    keys = [li["node"] for li in docs.find("ul").find_all("li", recursive=False)]
    assert "guide" in keys
    assert "index" not in keys


@then("the guide's navigation anchors match its heading ids")
def then_anchors_match(scenario_state: ScenarioState) -> None:
    """Every heading link in the sidebar lands on an element of the page."""
    output: Path = scenario_state["output"]
    page = BeautifulSoup(
        (output / "docs" / "guide.html").read_text(encoding="utf-8"), "html.parser"
    )
    links = page.find("aside").select('li[node="guide"] li.heading a')
    assert links, "expected heading links for the guide"
    for link in links:
        anchor = link["href"].split("#", 1)[1]
        assert page.find("main").find(id=anchor) is not None, (
            f"navigation anchor {anchor!r} has no matching id"
        )
