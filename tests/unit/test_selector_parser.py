from __future__ import annotations

import pytest

from element_selector.domain.errors import InvalidSelectorError
from element_selector.domain.models import Node
from element_selector.selectors.atomic import AtomicSelector, Discriminator
from element_selector.selectors.parser import parse_selector, parse_selector_list


def test_class_selector_matches_class_token() -> None:
    sel = parse_selector(".foo")
    assert sel.parts == (AtomicSelector.css_class("foo"),)
    assert sel.matches(Node.element("div", {"class": "foo bar"}))
    assert not sel.matches(Node.element("div", {"class": "bar"}))
    assert not sel.matches(Node.element("div", {"class": "foobar"}))


def test_class_selector_is_case_insensitive() -> None:
    assert parse_selector(".Foo").matches(Node.element("div", {"class": "x FOO"}))


def test_id_selector_is_case_insensitive_and_exact() -> None:
    sel = parse_selector("#bar")
    assert sel.matches(Node.element("div", {"id": "Bar"}))
    assert not sel.matches(Node.element("div", {"id": "barn"}))
    assert not sel.matches(Node.element("div", {"class": "bar"}))
    assert not sel.matches(Node.element("div"))


def test_compound_requires_every_part() -> None:
    sel = parse_selector("div.foo")
    assert sel.matches(Node.element("DIV", {"class": "foo"}))
    assert not sel.matches(Node.element("span", {"class": "foo"}))
    assert not sel.matches(Node.element("div", {"class": "bar"}))


def test_compound_mixes_discriminators_in_any_order() -> None:
    node = Node.element("section", {"id": "main", "class": "a b", "role": "Main"})
    assert parse_selector("section.b#main[role=main]").matches(node)
    assert parse_selector("#main.a").matches(node)
    assert parse_selector("[role=main].b#main").matches(node)
    assert len(parse_selector("section.b#main[role=main]").parts) == 4


def test_attribute_selector_name_and_value_case_insensitive() -> None:
    sel = parse_selector("[data-x=1]")
    assert sel.parts == (AtomicSelector.attribute("data-x", "1"),)
    assert sel.matches(Node.element("div", {"data-x": "1"}))
    assert sel.matches(Node.element("div", {"DATA-X": "1"}))
    assert not sel.matches(Node.element("div", {"data-x": "2"}))
    assert not sel.matches(Node.element("div"))


def test_attribute_selector_accepts_quoted_values() -> None:
    sel = parse_selector('[aria-label="Cookie banner"]')
    assert sel.matches(Node.element("div", {"aria-label": "cookie BANNER"}))
    assert parse_selector("[role='nav']").matches(Node.element("ul", {"role": "nav"}))


def test_several_attribute_tokens_in_one_entry() -> None:
    sel = parse_selector("[a=1][b=2]")
    assert sel.matches(Node.element("div", {"a": "1", "b": "2"}))
    assert not sel.matches(Node.element("div", {"a": "1"}))


def test_duplicate_parts_are_collapsed() -> None:
    assert len(parse_selector(".a.a.A").parts) == 1


@pytest.mark.parametrize(
    "text",
    [
        "[data-x]",
        "[data-x=]",
        "[data-x=1",
        "div > p",
        "div p",
        "a:hover",
        "*",
        ".",
        "#",
        "#id=x]",
        "div~p",
        "",
        "   ",
    ],
)
def test_invalid_selectors_fail_at_parse_time(text: str) -> None:
    with pytest.raises(InvalidSelectorError) as exc:
        parse_selector(text)
    assert exc.value.info.code == "INVALID_SELECTOR"


def test_error_reports_position_of_bad_character() -> None:
    with pytest.raises(InvalidSelectorError) as exc:
        parse_selector("div>p")
    assert exc.value.position == 3
    assert "position=3" in (exc.value.info.detail or "")


def test_unknown_discriminator_token() -> None:
    with pytest.raises(InvalidSelectorError):
        Discriminator.from_token("~")
    assert Discriminator.from_token("") is Discriminator.TYPE
    assert Discriminator.from_token("[") is Discriminator.ATTRIBUTE


def test_parse_selector_list_splits_on_commas() -> None:
    selectors = parse_selector_list("nav, .ad-banner ,#footer")
    assert len(selectors) == 3
    assert selectors.sources() == ["nav", ".ad-banner", "#footer"]


def test_parse_selector_list_skips_blank_entries() -> None:
    selectors = parse_selector_list("nav,, ,.x,")
    assert len(selectors) == 2
    # a blank entry must never turn into a match-everything selector
    assert not selectors.matches(Node.element("p"))


@pytest.mark.parametrize("raw", [None, "", "  ", ",", " , "])
def test_parse_selector_list_empty(raw) -> None:
    selectors = parse_selector_list(raw)
    assert len(selectors) == 0
    assert not selectors


def test_parse_selector_list_fails_on_any_bad_entry() -> None:
    with pytest.raises(InvalidSelectorError):
        parse_selector_list("nav,[data-ad],footer")
