"""Shared dataclasses used by the compilation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """A document heading that navigation can link to.

    Attributes
    ----------
    anchor : str
        The ``id`` the rendered heading carries.
    text : str
        Plain heading text used as the link label.
    level : int
        Heading level, ``1`` for ``<h1>``.
    """

    anchor: str
    text: str
    level: int


@dc.dataclass(slots=True)
class NavigationNode:
    """One entry of the navigation tree.

    Attributes
    ----------
    label : str
        Display label derived from the file or directory name.
    link : str
        Link target relative to the navigation base; templates prefix it
        with the ``{navigation-base}`` token.
    key : str
        Name stem stored in the ``node`` attribute for client-side scripts.
    is_directory : bool
        ``True`` for directories, which render a nested list.
    children : list[NavigationNode]
        Child entries of a directory, in listing order.
    headings : list[Heading]
        Headings of a document leaf, in document order.
    """

    label: str
    link: str
    key: str
    is_directory: bool = False
    children: list[NavigationNode] = dc.field(default_factory=list)
    headings: list[Heading] = dc.field(default_factory=list)


__all__ = ["Heading", "NavigationNode"]
