"""Element selector filter (mode selection + filtering + text extraction)."""

from __future__ import annotations

from concurrent import futures
from typing import Iterable, Optional

from ..config.settings import SelectorFilterSettings
from ..domain.models import PRIMARY_TEXT_FIELD, FilterMode, FilterResult, Node, ParsedDocument
from ..observability.logger import get_logger
from ..processing.dom_builder import build_tree
from ..selectors.compound import CompoundSelector, SelectorSet
from ..selectors.parser import parse_selector_list
from .text_extractor import extract_text
from .tree_filter import MatchObserver, collect, prune

logger = get_logger(__name__)


def _describe(node: Node) -> str:
    attrs = "".join(f" {name}={value}" for name, value in node.iter_attributes() if value is not None)
    return f"<{node.name}{attrs}>"


def log_match(mode: FilterMode, node: Node, selector: CompoundSelector) -> None:
    """Tracing observer: one debug event per matched node."""
    logger.debug("selector_matched", mode=mode.value, selector=str(selector), node=_describe(node))


class ElementSelectorFilter:
    """Filters a document tree with a blacklist or whitelist before indexing.

    Rules:
    - Selector sets are built once and never change afterwards
    - The tree handed in is never mutated
    - A protected URL is never filtered
    - A non-empty whitelist wins over the blacklist
    """

    def __init__(
        self,
        blacklist: SelectorSet | None = None,
        whitelist: SelectorSet | None = None,
        storage_field: str | None = None,
        protected_urls: Iterable[str] = (),
        observer: Optional[MatchObserver] = None,
    ):
        self._blacklist = blacklist or SelectorSet.empty()
        self._whitelist = whitelist or SelectorSet.empty()
        self._storage_field = storage_field or None
        self._protected_urls = frozenset(u for u in protected_urls if u)
        self._observer = observer

    @classmethod
    def from_settings(cls, settings: SelectorFilterSettings) -> ElementSelectorFilter:
        """Build the filter from configuration. Selector errors propagate."""
        blacklist = parse_selector_list(settings.selector_blacklist)
        whitelist = parse_selector_list(settings.selector_whitelist)
        storage_field = settings.storage_field_name()
        protected_urls = settings.protected_url_set()

        if blacklist:
            logger.info("selector_blacklist_configured", selectors=blacklist.sources())
        if whitelist:
            logger.info("selector_whitelist_configured", selectors=whitelist.sources())
            if blacklist:
                logger.warning("selector_blacklist_shadowed", reason="whitelist_takes_precedence")
        if storage_field:
            logger.info("selector_storage_field_configured", storage_field=storage_field)
        if protected_urls:
            logger.info("selector_protected_urls_configured", protected_urls=sorted(protected_urls))

        return cls(
            blacklist=blacklist,
            whitelist=whitelist,
            storage_field=storage_field,
            protected_urls=protected_urls,
            observer=log_match if settings.selector_trace_matches else None,
        )

    @property
    def blacklist(self) -> SelectorSet:
        return self._blacklist

    @property
    def whitelist(self) -> SelectorSet:
        return self._whitelist

    @property
    def storage_field(self) -> str | None:
        return self._storage_field

    @property
    def protected_urls(self) -> frozenset[str]:
        return self._protected_urls

    def is_protected(self, url: str, base_url: str = "") -> bool:
        return url in self._protected_urls or (bool(base_url) and base_url in self._protected_urls)

    def select_mode(self, url: str, base_url: str = "") -> FilterMode:
        if self.is_protected(url, base_url):
            return FilterMode.PROTECTED
        if self._whitelist:
            return FilterMode.WHITELIST
        if self._blacklist:
            return FilterMode.BLACKLIST
        return FilterMode.PASS_THROUGH

    def filter(self, document: ParsedDocument, root: Node) -> FilterResult:
        mode = self.select_mode(document.url, document.base_url)

        if mode is FilterMode.WHITELIST:
            filtered, matched = collect(root, self._whitelist, self._observer)
        elif mode is FilterMode.BLACKLIST:
            filtered = root.clone(deep=True)
            matched = prune(filtered, self._blacklist, self._observer)
        else:
            text = document.text if document.text is not None else extract_text(root)
            logger.debug("document_not_filtered", url=document.url, mode=mode.value)
            return FilterResult(mode=mode, text=text)

        text = extract_text(filtered)
        if self._storage_field is None:
            document.text = text
            target_field = PRIMARY_TEXT_FIELD
        else:
            document.metadata[self._storage_field] = text
            target_field = self._storage_field

        logger.debug(
            "document_filtered",
            url=document.url,
            mode=mode.value,
            matched_nodes=matched,
            target_field=target_field,
            text_length=len(text),
        )
        return FilterResult(mode=mode, text=text, target_field=target_field, matched_nodes=matched)

    def filter_html(self, document: ParsedDocument, html: str) -> FilterResult:
        return self.filter(document, build_tree(html))

    def filter_batch(
        self,
        items: Iterable[tuple[ParsedDocument, str]],
        max_workers: int = 4,
    ) -> list[FilterResult]:
        """Filter many (document, html) pairs in parallel; results keep input order."""
        items = list(items)
        if not items:
            return []
        with futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(lambda item: self.filter_html(item[0], item[1]), items))
