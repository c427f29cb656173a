"""
API endpoint tests
"""

import pytest
from fastapi.testclient import TestClient
from api.main import app
from api.dependencies import get_poller
from salesfeed.runner import PipelineRunner
from salesfeed.scheduler import FeedPoller
from schemas.item import ColorPair, Item, Tag


@pytest.fixture
def poller(stub_client, store):
    return FeedPoller(PipelineRunner(store, stub_client), stub_client)


@pytest.fixture
def client(poller):
    """Create test client with the poller overridden (startup is not run)"""
    app.dependency_overrides[get_poller] = lambda: poller

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def populated(store):
    older = Item(url="https://a.bandcamp.com/album/old", title="Old", utc_date=1000)
    newer = Item(url="https://b.bandcamp.com/album/new", title="New", utc_date=2000)
    store.add_if_absent(older)
    store.add_if_absent(newer)
    store.assign_tags(older, [Tag(tag_url="https://bandcamp.com/tag/dub", tag_name="dub")])
    store.assign_colors(older, ColorPair(background_color="rgb(10,20,30,1)", text_color="rgb(200,210,220,1)"))
    return store


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["items"] == "/items"


def test_items_newest_first(client, populated):
    response = client.get("/items")

    assert response.status_code == 200
    data = response.json()
    assert data["total_items"] == 2
    assert [i["utc_date"] for i in data["items"]] == [2000, 1000]


def test_items_expose_enrichment(client, populated):
    data = client.get("/items").json()
    newer, older = data["items"]

    assert newer["tags"] is None
    assert newer["background_color"] is None
    assert older["tags"] == [{"tag_url": "https://bandcamp.com/tag/dub", "tag_name": "dub"}]
    assert older["background_color"] == "rgb(10,20,30,1)"
    assert older["text_color"] == "rgb(200,210,220,1)"


def test_items_enriched_only_and_limit(client, populated):
    enriched = client.get("/items?enriched_only=true").json()
    limited = client.get("/items?limit=1").json()

    assert [i["utc_date"] for i in enriched["items"]] == [1000]
    assert [i["utc_date"] for i in limited["items"]] == [2000]
    assert limited["total_items"] == 2


def test_get_item_by_timestamp(client, populated):
    found = client.get("/items/1000")
    missing = client.get("/items/3000")

    assert found.status_code == 200
    assert found.json()["title"] == "Old"
    assert missing.status_code == 404


def test_health_reports_stopped_scheduler(client):
    data = client.get("/health").json()

    assert data["scheduler_running"] is False
    assert data["status"] == "unhealthy"


def test_health_degraded_after_failed_tick(client, poller, monkeypatch):
    monkeypatch.setattr(FeedPoller, "running", property(lambda self: True))
    poller.stats.record_tick(False, "feed down")

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["last_error"] == "feed down"


def test_stats(client, poller, populated):
    poller.stats.record_tick(True)
    poller.stats.events_seen = 5

    data = client.get("/stats").json()

    assert data["total_items"] == 2
    assert data["enriched_items"] == 1
    assert data["ticks_succeeded"] == 1
    assert data["events_seen"] == 5


def test_request_id_header(client):
    response = client.get("/health", headers={"X-Request-ID": "req_test"})

    assert response.headers["X-Request-ID"] == "req_test"
    assert "X-API-Latency-ms" in response.headers
