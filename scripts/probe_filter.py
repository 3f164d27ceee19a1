#!/usr/bin/env python3
"""Run the configured element filter over local HTML files.

Dev helper for tuning SELECTOR_BLACKLIST / SELECTOR_WHITELIST against saved
pages before rolling them out to the crawler.

Usage: probe_filter.py page.html [page2.html ...]
"""

from __future__ import annotations

import sys
from pathlib import Path

from element_selector.config.settings import get_settings
from element_selector.domain.models import ParsedDocument
from element_selector.services.element_filter import ElementSelectorFilter


def main(paths: list[str]) -> int:
    f = ElementSelectorFilter.from_settings(get_settings())

    for p in paths:
        try:
            html = Path(p).read_text(encoding="utf-8", errors="replace")
            doc = ParsedDocument(url=Path(p).resolve().as_uri())
            result = f.filter_html(doc, html)
            print(f"{p} mode={result.mode.value} matched={result.matched_nodes} textlen={len(result.text)}")
            print(result.text[:500])
        except OSError as e:
            print(f"{p} ERROR {type(e).__name__}: {str(e)[:200]}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
