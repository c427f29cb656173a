"""
Pytest configuration and fixtures
"""

import pytest
from unittest.mock import AsyncMock
from schemas.feed import RawEvent
from salesfeed.loaders.item_store import ItemStore
from tests.factories import TAG_PAGE_HTML, make_event, make_snapshot


@pytest.fixture
def store():
    return ItemStore()


@pytest.fixture
def raw_event():
    return RawEvent.parse_obj(make_event(1000))


@pytest.fixture
def stub_client():
    """Feed client double: every fetch succeeds unless a test says otherwise"""
    client = AsyncMock()
    client.feed_url = "https://bandcamp.example/api/salesfeed/1/get_initial"
    client.fetch_snapshot.return_value = make_snapshot([])
    client.fetch_document.return_value = TAG_PAGE_HTML
    client.fetch_bytes.return_value = b"\x89PNG fake image bytes"
    return client


@pytest.fixture
def stub_palette():
    return lambda data: [[10, 20, 30], [120, 130, 140], [200, 210, 220]]
