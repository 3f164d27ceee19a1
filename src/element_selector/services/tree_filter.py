"""Tree filtering traversals.

Both traversals are pre-order and use an explicit stack so adversarially deep
trees cannot exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..domain.models import FilterMode, Node
from ..selectors.compound import CompoundSelector, SelectorSet

MatchObserver = Callable[[FilterMode, Node, CompoundSelector], None]


def prune(root: Node, selectors: SelectorSet, observer: Optional[MatchObserver] = None) -> int:
    """Blacklist: empty every matched node in place and stop descending there.

    Matched nodes stay in the tree as empty placeholders so sibling order is
    kept. The caller owns ``root`` (normally a private clone).

    Returns:
        Number of pruned subtrees.
    """
    pruned = 0
    stack = [root]
    while stack:
        node = stack.pop()
        matched = selectors.first_match(node)
        if matched is not None:
            if observer is not None:
                observer(FilterMode.BLACKLIST, node, matched)
            node.clear()
            pruned += 1
            continue
        stack.extend(reversed(node.children))
    return pruned


def collect(root: Node, selectors: SelectorSet, observer: Optional[MatchObserver] = None) -> tuple[Node, int]:
    """Whitelist: deep-clone every maximal matched subtree under a fresh root.

    The source tree is only read. Matches from any depth become direct
    children of the destination root, in document order; nothing inside a
    collected subtree is evaluated again.

    Returns:
        (destination root, number of collected subtrees)
    """
    destination = root.clone(deep=False)
    collected = 0
    stack = [root]
    while stack:
        node = stack.pop()
        matched = selectors.first_match(node)
        if matched is not None:
            if observer is not None:
                observer(FilterMode.WHITELIST, node, matched)
            destination.append_child(node.clone(deep=True))
            collected += 1
            continue
        stack.extend(reversed(node.children))
    return destination, collected
