"""FastAPI app (internal-only).

Exposes the element filter to the crawl pipeline: one call per parsed
document, returning the text the indexer should read.
"""

from __future__ import annotations

from typing import List

from fastapi import FastAPI, HTTPException

from .config.settings import get_settings
from .domain.errors import InvalidInputError
from .domain.models import FilterResult, IndexDocument, ParsedDocument
from .lifespan import app_state
from .models.requests import FilterRequest, FilterResponse, SelectorConfigResponse
from .observability.logger import get_logger
from .services.element_filter import ElementSelectorFilter
from .services.indexer import SelectorFieldIndexer
from .utils.validators import html_size_bytes, is_valid_http_url

logger = get_logger(__name__)

app = FastAPI(title="Element Selector Filter", version="0.1.0")


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


def _require_filter() -> ElementSelectorFilter:
    element_filter = app_state.get("element_filter")
    if element_filter is None:
        raise HTTPException(status_code=503, detail="element_filter_unavailable")
    return element_filter


def _validate(payload: FilterRequest) -> ParsedDocument:
    if not is_valid_http_url(payload.url):
        raise InvalidInputError("url must be an absolute http(s) URL", detail=payload.url)
    if payload.baseUrl and not is_valid_http_url(payload.baseUrl):
        raise InvalidInputError("baseUrl must be an absolute http(s) URL", detail=payload.baseUrl)
    if html_size_bytes(payload.html) > get_settings().max_html_bytes:
        raise HTTPException(status_code=413, detail="html_too_large")
    return ParsedDocument(url=payload.url, base_url=payload.baseUrl or payload.url, text=payload.text)


def _serialize(document: ParsedDocument, result: FilterResult) -> FilterResponse:
    indexer: SelectorFieldIndexer | None = app_state.get("indexer")
    index_doc = IndexDocument(url=document.url)
    if indexer is not None:
        indexer.index(index_doc, document)
    return FilterResponse(
        url=document.url,
        mode=result.mode.value,
        text=result.text,
        targetField=result.target_field,
        matchedNodes=result.matched_nodes,
        metadata=dict(document.metadata),
        indexFields=index_doc.fields,
    )


@app.get("/api/v1/selectors", response_model=SelectorConfigResponse)
def selectors() -> SelectorConfigResponse:
    element_filter = _require_filter()
    return SelectorConfigResponse(
        blacklist=element_filter.blacklist.sources(),
        whitelist=element_filter.whitelist.sources(),
        storageField=element_filter.storage_field,
        protectedUrls=len(element_filter.protected_urls),
    )


@app.post("/api/v1/filter", response_model=FilterResponse)
def filter_document(payload: FilterRequest) -> FilterResponse:
    element_filter = _require_filter()
    try:
        document = _validate(payload)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=exc.info.message) from exc

    result = element_filter.filter_html(document, payload.html)
    logger.info("document_processed", url=document.url, mode=result.mode.value, matched_nodes=result.matched_nodes)
    return _serialize(document, result)


@app.post("/api/v1/filter/batch", response_model=List[FilterResponse])
def filter_documents(payload: List[FilterRequest]) -> List[FilterResponse]:
    element_filter = _require_filter()
    try:
        items = [(_validate(p), p.html) for p in payload]
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=exc.info.message) from exc

    results = element_filter.filter_batch(items, max_workers=get_settings().filter_max_workers)
    logger.info("batch_processed", documents=len(results))
    return [_serialize(document, result) for (document, _), result in zip(items, results)]
