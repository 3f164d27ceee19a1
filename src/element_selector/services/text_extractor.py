"""Plain-text extraction from a (filtered) node tree."""

from __future__ import annotations

import re

from ..domain.models import Node, NodeKind

_WHITESPACE = re.compile(r"\s+")
SKIP_TAGS = frozenset({"script", "style"})


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def _should_skip(node: Node) -> bool:
    if node.kind is NodeKind.COMMENT:
        return True
    return (node.name or "").lower() in SKIP_TAGS


def extract_text(root: Node) -> str:
    """Join all non-empty text fragments in document order with single spaces.

    Script and style elements and comments are skipped with their whole
    subtree.
    """
    fragments: list[str] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if _should_skip(node):
            continue
        if node.kind is NodeKind.TEXT and node.value:
            text = normalize_whitespace(node.value)
            if text:
                fragments.append(text)
        stack.extend(reversed(node.children))
    return " ".join(fragments)
