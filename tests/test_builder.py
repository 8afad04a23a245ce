"""Tests for building every version of a project."""

from __future__ import annotations

import typing as typ

import pytest

from docmirror.builder import CODEHILITE_STYLESHEET, DocumentationBuilder
from docmirror.config import LoaderConfig, SiteConfig
from docmirror.loaders import LoaderError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from docmirror.config import CompilerConfig


@pytest.fixture
def versioned_source(
    tmp_path: Path, tree_writer: cabc.Callable[[Path], Path]
) -> Path:
    """Return a local source with two versions of the sample tree."""
    root = tmp_path / "versions"
    for name in ("1.0", "2.0"):
        tree_writer(root / name)
    return root


def _site(
    config: CompilerConfig, source: Path, versions: cabc.Sequence[str] = ()
) -> SiteConfig:
    return SiteConfig(
        compiler=config,
        loader=LoaderConfig(handler="local", source=str(source), versions=list(versions)),
    )


def test_builder_compiles_every_version_and_publishes_assets(
    versioned_source: Path, compiler_config: CompilerConfig
) -> None:
    """Each version gets its own tree next to the shared vendor directory."""
    report = DocumentationBuilder(_site(compiler_config, versioned_source)).run()

    project = compiler_config.build_path / "demo"
    assert report.ok
    assert report.compiled == ["1.0", "2.0"]
    assert (project / "1.0" / "docs" / "guide.html").is_file()
    assert (project / "2.0" / "docs" / "guide.html").is_file()
    assert (project / "vendor" / "docmirror.css").is_file()
    stylesheet = (project / "vendor" / CODEHILITE_STYLESHEET).read_text(encoding="utf-8")
    assert ".codehilite" in stylesheet


def test_builder_records_unavailable_versions(
    versioned_source: Path, compiler_config: CompilerConfig
) -> None:
    """A version without a readable tree fails without stopping the others."""
    site = _site(compiler_config, versioned_source, ["1.0", "3.0", "2.0"])

    report = DocumentationBuilder(site).run()

    assert report.compiled == ["1.0", "2.0"]
    assert report.failed == ["3.0"]
    assert not report.ok
    assert not (compiler_config.build_path / "demo" / "3.0").exists()


def test_builder_compiles_selected_versions_with_full_switcher(
    versioned_source: Path, compiler_config: CompilerConfig
) -> None:
    """Compiling one version still links to all of them."""
    report = DocumentationBuilder(_site(compiler_config, versioned_source)).run(
        only=["2.0"]
    )

    project = compiler_config.build_path / "demo"
    assert report.compiled == ["2.0"]
    assert not (project / "1.0").exists()
    switcher = (project / "2.0" / "version-switcher.html").read_text(encoding="utf-8")
    assert 'node="1.0"' in switcher and 'node="2.0"' in switcher

    with pytest.raises(LoaderError, match="Unknown versions: 9.9"):
        DocumentationBuilder(_site(compiler_config, versioned_source)).run(only=["9.9"])


def test_builder_uses_docs_sub_directory(
    tmp_path: Path,
    compiler_config: CompilerConfig,
    tree_writer: cabc.Callable[[Path], Path],
) -> None:
    """The loader's docs path is appended to each materialized version."""
    source = tmp_path / "repo"
    tree_writer(source / "1.0" / "docs")
    (source / "1.0" / "setup.py").write_text("", encoding="utf-8")
    site = SiteConfig(
        compiler=compiler_config,
        loader=LoaderConfig(handler="local", source=str(source), docs_path="docs"),
    )

    DocumentationBuilder(site).run()

    assert (compiler_config.build_path / "demo" / "1.0" / "index.html").is_file()


def test_clean_removes_stale_output(
    versioned_source: Path, compiler_config: CompilerConfig
) -> None:
    """A clean build starts from an empty project directory."""
    stale = compiler_config.build_path / "demo" / "0.9" / "old.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")
    builder = DocumentationBuilder(_site(compiler_config, versioned_source))

    builder.run()
    assert stale.exists(), "regular builds keep unrelated output"
    builder.run(clean=True)

    assert not stale.exists()
