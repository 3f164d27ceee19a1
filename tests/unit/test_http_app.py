from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from element_selector.config.settings import SelectorFilterSettings, reset_settings
from element_selector.http_app import app
from element_selector.lifespan import app_state
from element_selector.services.element_filter import ElementSelectorFilter
from element_selector.services.indexer import SelectorFieldIndexer


@pytest.fixture
def client():
    reset_settings()
    element_filter = ElementSelectorFilter.from_settings(
        SelectorFilterSettings(
            selector_blacklist="nav,.ad",
            selector_storage_field="stripped",
            selector_protected_urls="https://example.com/keep",
        )
    )
    app_state["element_filter"] = element_filter
    app_state["indexer"] = SelectorFieldIndexer(element_filter.storage_field)
    yield TestClient(app)
    app_state.clear()
    reset_settings()


def test_healthz(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_selectors_endpoint_reports_configuration(client: TestClient) -> None:
    body = client.get("/api/v1/selectors").json()
    assert body == {"blacklist": ["nav", ".ad"], "whitelist": [], "storageField": "stripped", "protectedUrls": 1}


def test_filter_endpoint_writes_storage_field(client: TestClient) -> None:
    resp = client.post(
        "/api/v1/filter",
        json={"url": "https://example.com/a", "html": '<nav>Menu</nav><p>Body</p><div class="ad">Buy</div>'},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["mode"] == "BLACKLIST"
    assert body["text"] == "Body"
    assert body["targetField"] == "stripped"
    assert body["matchedNodes"] == 2
    assert body["metadata"] == {"stripped": "Body"}
    assert body["indexFields"] == {"stripped": ["Body"]}


def test_filter_endpoint_protected_url(client: TestClient) -> None:
    resp = client.post("/api/v1/filter", json={"url": "https://example.com/keep", "html": "<nav>Menu</nav><p>Body</p>"})
    body = resp.json()
    assert body["mode"] == "PROTECTED"
    assert body["text"] == "Menu Body"
    assert body["targetField"] is None
    assert body["indexFields"] == {}


def test_filter_endpoint_rejects_relative_url(client: TestClient) -> None:
    resp = client.post("/api/v1/filter", json={"url": "/a", "html": "<p>x</p>"})
    assert resp.status_code == 400


def test_filter_endpoint_rejects_oversized_html(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_HTML_BYTES", "10")
    reset_settings()
    resp = client.post("/api/v1/filter", json={"url": "https://example.com/a", "html": "<p>" + "x" * 50 + "</p>"})
    assert resp.status_code == 413


def test_batch_endpoint_preserves_order(client: TestClient) -> None:
    payload = [{"url": f"https://example.com/{i}", "html": f"<nav>n</nav><p>doc {i}</p>"} for i in range(5)]
    resp = client.post("/api/v1/filter/batch", json=payload)
    assert resp.status_code == 200
    assert [item["text"] for item in resp.json()] == [f"doc {i}" for i in range(5)]


def test_filter_unavailable_before_startup() -> None:
    app_state.clear()
    resp = TestClient(app).post("/api/v1/filter", json={"url": "https://example.com/a", "html": ""})
    assert resp.status_code == 503
