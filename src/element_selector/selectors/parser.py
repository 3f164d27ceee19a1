"""Selector string parsing.

Grammar (one configured entry):

    compound  := token+
    token     := [discriminator] name [ "=" value "]" ]
    discriminator := "" | "#" | "." | "["
    name      := [A-Za-z0-9_-]+

Entries in a configured list are separated by commas. Anything outside this
grammar (combinators, pseudo-classes, whitespace inside an entry, a bare
``[attr]``) is a configuration error.
"""

from __future__ import annotations

import re
from typing import Optional

from ..domain.errors import InvalidSelectorError
from .atomic import AtomicSelector, Discriminator
from .compound import CompoundSelector, SelectorSet

_TOKEN = re.compile(
    r"""
    (?P<disc>[.#\[]?)
    (?P<name>[A-Za-z0-9_-]*)
    (?:=(?P<value>"[^"]*"|'[^']*'|[^\]]*)\])?
    """,
    re.VERBOSE,
)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _build(disc: Discriminator, name: str, value: Optional[str], text: str, pos: int) -> AtomicSelector:
    if not name:
        raise InvalidSelectorError("selector token is missing a name", selector=text, position=pos)
    if disc is Discriminator.ATTRIBUTE:
        if value is None:
            raise InvalidSelectorError(
                "attribute selector must have the form [name=value]", selector=text, position=pos
            )
        value = _unquote(value.strip())
        if not value:
            raise InvalidSelectorError("attribute selector value is empty", selector=text, position=pos)
        return AtomicSelector.attribute(name, value)
    if value is not None:
        raise InvalidSelectorError("only attribute selectors take a value", selector=text, position=pos)
    if disc is Discriminator.ID:
        return AtomicSelector.id(name)
    if disc is Discriminator.CLASS:
        return AtomicSelector.css_class(name)
    return AtomicSelector.type(name)


def parse_selector(text: str) -> CompoundSelector:
    """Parse one entry such as ``div.foo#bar[data-x=1]`` into a compound selector."""
    source = text.strip()
    if not source:
        raise InvalidSelectorError("selector is empty", selector=text)

    parts: list[AtomicSelector] = []
    pos = 0
    while pos < len(source):
        match = _TOKEN.match(source, pos)
        if match is None or match.end() == pos:
            raise InvalidSelectorError(
                f"unexpected character {source[pos]!r} in selector", selector=source, position=pos
            )
        disc = Discriminator.from_token(match.group("disc"))
        parts.append(_build(disc, match.group("name"), match.group("value"), source, pos))
        pos = match.end()

    return CompoundSelector.of(parts, source=source)


def parse_selector_list(raw: Optional[str]) -> SelectorSet:
    """Parse a comma-separated list; blank entries are skipped, not matched-all."""
    if raw is None or not raw.strip():
        return SelectorSet.empty()
    entries = [entry.strip() for entry in raw.split(",")]
    return SelectorSet.of(parse_selector(entry) for entry in entries if entry)
