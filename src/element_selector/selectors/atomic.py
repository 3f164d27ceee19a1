"""Atomic selector predicates (type, id, class, attribute)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..domain.errors import InvalidSelectorError
from ..domain.models import Node


class Discriminator(str, Enum):
    TYPE = ""
    ID = "#"
    CLASS = "."
    ATTRIBUTE = "["

    @classmethod
    def from_token(cls, token: str) -> Discriminator:
        for discriminator in cls:
            if discriminator.value == token:
                return discriminator
        raise InvalidSelectorError(
            f"{token!r} is an invalid selector discriminator; "
            'only "#", ".", "[" or an empty string are allowed',
            selector=token,
        )


@dataclass(frozen=True)
class AtomicSelector:
    """A single match condition. Strings are stored lower-cased."""

    kind: Discriminator
    name: str
    value: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidSelectorError(f"{self.kind.name.lower()} selector requires a name")
        if self.kind is Discriminator.ATTRIBUTE and not self.value:
            raise InvalidSelectorError(
                f"attribute selector [{self.name}] requires a value",
                selector=f"[{self.name}]",
            )
        object.__setattr__(self, "name", self.name.lower())
        if self.value is not None:
            object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def type(cls, name: str) -> AtomicSelector:
        return cls(Discriminator.TYPE, name)

    @classmethod
    def id(cls, value: str) -> AtomicSelector:
        return cls(Discriminator.ID, value)

    @classmethod
    def css_class(cls, value: str) -> AtomicSelector:
        return cls(Discriminator.CLASS, value)

    @classmethod
    def attribute(cls, name: str, value: str) -> AtomicSelector:
        return cls(Discriminator.ATTRIBUTE, name, value)

    def matches(self, node: Node) -> bool:
        return _MATCHERS[self.kind](self, node)

    def __str__(self) -> str:
        if self.kind is Discriminator.ATTRIBUTE:
            return f"[{self.name}={self.value}]"
        return f"{self.kind.value}{self.name}"


def _match_type(selector: AtomicSelector, node: Node) -> bool:
    return (node.name or "").lower() == selector.name


def _match_id(selector: AtomicSelector, node: Node) -> bool:
    value = node.get_attribute("id")
    return value is not None and value.lower() == selector.name


def _match_class(selector: AtomicSelector, node: Node) -> bool:
    value = node.get_attribute("class")
    if not value:
        return False
    return selector.name in value.lower().split()


def _match_attribute(selector: AtomicSelector, node: Node) -> bool:
    for name, value in node.iter_attributes():
        if name is None or value is None:
            continue
        if name.lower() == selector.name and value.lower() == selector.value:
            return True
    return False


_MATCHERS: dict[Discriminator, Callable[[AtomicSelector, Node], bool]] = {
    Discriminator.TYPE: _match_type,
    Discriminator.ID: _match_id,
    Discriminator.CLASS: _match_class,
    Discriminator.ATTRIBUTE: _match_attribute,
}

_missing = set(Discriminator) - set(_MATCHERS)
if _missing:  # pragma: no cover
    raise RuntimeError(f"no matcher registered for {sorted(d.name for d in _missing)}")
