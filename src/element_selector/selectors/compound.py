"""Compound selectors (AND of atomic parts) and selector sets (OR of compounds)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..domain.models import Node
from .atomic import AtomicSelector


@dataclass(frozen=True)
class CompoundSelector:
    """All parts must match the same node. No parts matches everything."""

    parts: tuple[AtomicSelector, ...]
    source: str = ""

    @classmethod
    def of(cls, parts: Iterable[AtomicSelector], source: str = "") -> CompoundSelector:
        # dict keeps first-seen order while dropping duplicates
        return cls(parts=tuple(dict.fromkeys(parts)), source=source)

    def matches(self, node: Node) -> bool:
        return all(part.matches(node) for part in self.parts)

    def __str__(self) -> str:
        return self.source or "".join(str(p) for p in self.parts)


@dataclass(frozen=True)
class SelectorSet:
    """Blacklist or whitelist. Built once at startup, read-only afterwards."""

    selectors: tuple[CompoundSelector, ...] = ()

    @classmethod
    def empty(cls) -> SelectorSet:
        return cls()

    @classmethod
    def of(cls, selectors: Iterable[CompoundSelector]) -> SelectorSet:
        return cls(selectors=tuple(dict.fromkeys(selectors)))

    def first_match(self, node: Node) -> Optional[CompoundSelector]:
        for selector in self.selectors:
            if selector.matches(node):
                return selector
        return None

    def matches(self, node: Node) -> bool:
        return self.first_match(node) is not None

    def sources(self) -> list[str]:
        return [str(s) for s in self.selectors]

    def __len__(self) -> int:
        return len(self.selectors)

    def __bool__(self) -> bool:
        return bool(self.selectors)

    def __iter__(self) -> Iterator[CompoundSelector]:
        return iter(self.selectors)
