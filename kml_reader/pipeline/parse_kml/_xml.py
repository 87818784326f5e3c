"""Namespace-agnostic lxml element helpers.

KML files in the wild use the 2.2 namespace, older 2.0/2.1 namespaces,
or none at all; every lookup here matches on the element's local name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element


def local_name(elem: _Element) -> str:
    """Return the tag without its ``{namespace}`` prefix ("" for comments/PIs)."""
    tag = elem.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def iter_local(node: _Element, name: str, *, include_self: bool = False) -> Iterator[_Element]:
    """Yield descendants of ``node`` with the given local name, in document order."""
    for elem in node.iter():
        if elem is node and not include_self:
            continue
        if local_name(elem) == name:
            yield elem


def child(node: _Element, name: str) -> _Element | None:
    """Return the first direct child with the given local name."""
    for elem in node:
        if local_name(elem) == name:
            return elem
    return None


def children(node: _Element, name: str) -> list[_Element]:
    """Return all direct children with the given local name."""
    return [elem for elem in node if local_name(elem) == name]


def element_text(elem: _Element) -> str:
    """Full text content of an element (CDATA included, markup and comments dropped)."""
    text = etree.tostring(elem, method="text", encoding="unicode", with_tail=False)
    return text.strip()


def first_text(node: _Element, name: str, *, include_self: bool = False) -> str:
    """Text of the first matching descendant in document order, or ``""``."""
    for elem in iter_local(node, name, include_self=include_self):
        return element_text(elem)
    return ""
