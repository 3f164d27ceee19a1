"""Convert raw HTML into the filter's node model (BeautifulSoup + lxml)."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from ..domain.models import Node, NodeKind

# Markup-level strings that carry no document text
_DROPPED_STRINGS = (Doctype, Declaration, ProcessingInstruction)


def _attribute_pairs(tag: Tag) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for name, value in tag.attrs.items():
        # bs4 splits multi-valued attributes (class, rel, ...) into lists
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        pairs.append((name, "" if value is None else str(value)))
    return pairs


def _convert(element) -> Node | None:
    if isinstance(element, Tag):
        return Node(kind=NodeKind.ELEMENT, name=element.name, attributes=_attribute_pairs(element))
    if isinstance(element, Comment):
        return Node.comment(str(element))
    if isinstance(element, _DROPPED_STRINGS):
        return None
    if isinstance(element, NavigableString):
        return Node.text(str(element))
    return None


def soup_to_tree(soup: BeautifulSoup) -> Node:
    root = Node.fragment()
    stack: list[tuple[Tag, Node]] = [(soup, root)]
    while stack:
        source, target = stack.pop()
        for child in source.children:
            node = _convert(child)
            if node is None:
                continue
            target.append_child(node)
            if isinstance(child, Tag) and child.contents:
                stack.append((child, node))
    return root


def build_tree(html: str) -> Node:
    """Parse ``html`` and return a fragment root holding the document."""
    if not html or not html.strip():
        return Node.fragment()
    soup = BeautifulSoup(html, "lxml")
    return soup_to_tree(soup)
