"""Framework-agnostic domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

PRIMARY_TEXT_FIELD = "content"


class NodeKind(str, Enum):
    ELEMENT = "ELEMENT"
    TEXT = "TEXT"
    COMMENT = "COMMENT"
    FRAGMENT = "FRAGMENT"


class FilterMode(str, Enum):
    WHITELIST = "WHITELIST"
    BLACKLIST = "BLACKLIST"
    PROTECTED = "PROTECTED"
    PASS_THROUGH = "PASS_THROUGH"


@dataclass
class Node:
    """One node of a parsed markup tree.

    Attribute names keep their original case; lookups are case-insensitive.
    ``attributes`` may be ``None`` for trees built by a sloppy upstream parser,
    which is treated the same as an empty attribute list.
    """

    kind: NodeKind
    name: str = ""
    value: Optional[str] = None
    attributes: Optional[list[tuple[str, str]]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    @classmethod
    def element(cls, name: str, attributes: dict[str, str] | None = None, children: list[Node] | None = None) -> Node:
        return cls(
            kind=NodeKind.ELEMENT,
            name=name,
            attributes=list((attributes or {}).items()),
            children=list(children or []),
        )

    @classmethod
    def text(cls, value: str) -> Node:
        return cls(kind=NodeKind.TEXT, name="#text", value=value)

    @classmethod
    def comment(cls, value: str) -> Node:
        return cls(kind=NodeKind.COMMENT, name="#comment", value=value)

    @classmethod
    def fragment(cls, children: list[Node] | None = None) -> Node:
        return cls(kind=NodeKind.FRAGMENT, name="#document-fragment", children=list(children or []))

    def append_child(self, child: Node) -> Node:
        self.children.append(child)
        return child

    def iter_attributes(self) -> Iterator[tuple[str, str]]:
        if not self.attributes:
            return iter(())
        return iter(self.attributes)

    def get_attribute(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for attr_name, attr_value in self.iter_attributes():
            if attr_name is not None and attr_name.lower() == wanted:
                return attr_value
        return None

    def clear(self) -> None:
        """Drop this node's text and detach all of its children."""
        if self.value is not None:
            self.value = ""
        self.children = []

    def clone(self, deep: bool = True) -> Node:
        root = self._shallow_copy()
        if not deep:
            return root

        # (source, copy) pairs; explicit stack keeps deep trees off the call stack
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                copied = child._shallow_copy()
                target.children.append(copied)
                if child.children:
                    stack.append((child, copied))
        return root

    def _shallow_copy(self) -> Node:
        return Node(
            kind=self.kind,
            name=self.name,
            value=self.value,
            attributes=None if self.attributes is None else list(self.attributes),
        )


@dataclass
class ParsedDocument:
    """Per-document parse output handed to the filter.

    ``text`` is the primary extracted-text field; ``metadata`` holds named
    side-channel fields read by the indexing stage.
    """

    url: str
    base_url: str = ""
    text: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FilterResult:
    mode: FilterMode
    text: str
    target_field: Optional[str] = None
    matched_nodes: int = 0

    @property
    def written(self) -> bool:
        return self.target_field is not None


@dataclass
class IndexDocument:
    url: str
    fields: dict[str, list[str]] = field(default_factory=dict)

    def add(self, name: str, value: str) -> None:
        self.fields.setdefault(name, []).append(value)

    def get(self, name: str) -> list[str]:
        return list(self.fields.get(name, []))
