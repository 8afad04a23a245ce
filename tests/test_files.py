"""Unit tests for the filesystem and naming helpers."""

from __future__ import annotations

import typing as typ

import pytest

from docmirror.files import (
    filename_to_heading,
    force_copy,
    force_write,
    heading_to_filename,
    recursive_copy,
    recursive_delete,
    reverse_path,
    sorted_entries,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.parametrize(
    ("path", "offset", "expected"),
    [
        ("a/b/c.html", 1, "../../"),
        ("a.html", 0, "../"),
        ("docs/guide.html", 0, "../../"),
        ("index.html", 1, ""),
        ("a.html", 5, ""),
    ],
)
def test_reverse_path_climbs_one_segment_per_component(
    path: str, offset: int, expected: str
) -> None:
    """Each component beyond the offset adds one parent segment."""
    assert reverse_path(path, offset) == expected, (
        f"reverse_path({path!r}, {offset}) should be {expected!r}"
    )


def test_heading_to_filename_builds_anchor_ids() -> None:
    """Spaces become hyphens, periods underscores, and text is lower-cased."""
    assert heading_to_filename("Getting Started") == "getting-started"
    assert heading_to_filename("Release 1.2 Notes") == "release-1_2-notes"


def test_filename_to_heading_builds_labels() -> None:
    """The extension is dropped and the first letter capitalized."""
    assert filename_to_heading("getting-started.md") == "Getting started"
    assert filename_to_heading("api_v2.tar.md") == "Api.v2", (
        "everything from the first dot should be dropped before substitutions"
    )
    assert filename_to_heading("docs") == "Docs"


def test_force_write_creates_missing_parents(tmp_path: Path) -> None:
    """Writing below a missing directory creates it first."""
    target = tmp_path / "a" / "b" / "page.html"

    force_write(target, "<p>hi</p>")
    force_write(tmp_path / "raw" / "blob.bin", b"\x00\x01")

    assert target.read_text(encoding="utf-8") == "<p>hi</p>"
    assert (tmp_path / "raw" / "blob.bin").read_bytes() == b"\x00\x01"


def test_force_copy_is_byte_identical(tmp_path: Path) -> None:
    """Copied files keep their exact bytes."""
    source = tmp_path / "logo.png"
    source.write_bytes(b"\x89PNG\x00\xff")

    copied = force_copy(source, tmp_path / "out" / "images" / "logo.png")

    assert copied.read_bytes() == source.read_bytes()


def test_recursive_copy_and_delete(tmp_path: Path) -> None:
    """Directories copy recursively; deleting missing paths is a no-op."""
    source = tmp_path / "vendor"
    (source / "css").mkdir(parents=True)
    (source / "css" / "site.css").write_text("body{}", encoding="utf-8")

    assert recursive_copy(source, tmp_path / "copy") is True
    assert (tmp_path / "copy" / "css" / "site.css").is_file()
    assert recursive_copy(tmp_path / "missing", tmp_path / "other") is False
    assert not (tmp_path / "other").exists(), "nothing should be created"

    recursive_delete(tmp_path / "copy")
    recursive_delete(tmp_path / "copy")
    assert not (tmp_path / "copy").exists()


def test_sorted_entries_skips_hidden_by_default(tmp_path: Path) -> None:
    """Entries are name-sorted and dot entries only appear on request."""
    for name in ("b.md", "a.md", ".git"):
        (tmp_path / name).write_text("", encoding="utf-8")

    assert [p.name for p in sorted_entries(tmp_path)] == ["a.md", "b.md"]
    assert [p.name for p in sorted_entries(tmp_path, include_hidden=True)] == [
        ".git",
        "a.md",
        "b.md",
    ]
