import asyncio
import pytest
from datetime import timedelta
from unittest.mock import AsyncMock
from core.exceptions import FeedFetchError, NetworkError
from salesfeed.enrichers.colors import ColorEnricher
from salesfeed.enrichers.tags import TagEnricher
from salesfeed.runner import PipelineRunner
from salesfeed.scheduler import FeedPoller, build_poller
from tests.factories import make_event, make_snapshot


@pytest.fixture
def poller(stub_client, store, stub_palette):
    runner = PipelineRunner(
        store,
        stub_client,
        tag_enricher=TagEnricher(stub_client, store, sleep=AsyncMock()),
        color_enricher=ColorEnricher(stub_client, store, palette_extractor=stub_palette),
    )
    return FeedPoller(runner, stub_client, interval_seconds=10, max_overlap=3)


def test_poller_initialization():
    poller = build_poller()
    assert poller.scheduler is not None
    assert poller.interval_seconds == 10
    assert len(poller.store) == 0
    assert poller.running is False


@pytest.mark.asyncio
async def test_poll_once_admits_items(poller, stub_client):
    stub_client.fetch_snapshot.return_value = make_snapshot([make_event(1000)])

    result = await poller.poll_once()
    await poller.runner.wait_for_enrichment()

    assert result["status"] == "success"
    assert [i.utc_date for i in result["new_items"]] == [1000]
    assert poller.stats.ticks_succeeded == 1
    assert poller.stats.last_tick_succeeded is True


@pytest.mark.asyncio
async def test_failed_fetch_skips_tick(poller, stub_client):
    stub_client.fetch_snapshot.side_effect = FeedFetchError("feed down")

    result = await poller.poll_once()

    assert result["status"] == "skipped"
    assert len(poller.store) == 0
    assert poller.stats.ticks_failed == 1
    assert poller.stats.last_tick_succeeded is False
    assert poller.stats.last_error == "feed down"


@pytest.mark.asyncio
async def test_failed_tick_does_not_stop_next_tick(poller, stub_client):
    stub_client.fetch_snapshot.side_effect = [
        NetworkError("Connection refused"),
        make_snapshot([make_event(1000)]),
    ]

    first = await poller.poll_once()
    second = await poller.poll_once()
    await poller.runner.wait_for_enrichment()

    assert first["status"] == "skipped"
    assert second["status"] == "success"
    assert len(poller.store) == 1
    assert poller.stats.ticks_failed == 1
    assert poller.stats.ticks_succeeded == 1


@pytest.mark.asyncio
async def test_runner_crash_is_contained(poller, stub_client):
    poller.runner.run = AsyncMock(side_effect=RuntimeError("boom"))

    result = await poller.poll_once()

    assert result["status"] == "failed"
    assert poller.stats.last_error == "boom"


@pytest.mark.asyncio
async def test_start_schedules_interval_job(poller):
    poller.start()
    try:
        job = poller.scheduler.get_job("feed_poll")

        assert poller.running is True
        assert job is not None
        assert job.trigger.interval == timedelta(seconds=10)
        assert job.max_instances == 3
        assert job.coalesce is False
    finally:
        poller.stop()


async def yield_once(delay):
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_aclose_cancels_pending_enrichment(poller, stub_client):
    # tag fetch never succeeds, so the retry loop would run forever
    stub_client.fetch_document.side_effect = NetworkError("down")
    poller.runner.tag_enricher._sleep = yield_once
    stub_client.fetch_snapshot.return_value = make_snapshot([make_event(1000)])

    await poller.poll_once()
    await poller.aclose()

    assert poller.runner.pending_enrichments == 0
    stub_client.aclose.assert_awaited_once()
