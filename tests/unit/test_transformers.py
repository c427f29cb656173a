"""
Unit tests for the price filter and the event normalizer
"""

import pytest
from schemas.feed import RawEvent
from salesfeed.transformers.normalizer import EventNormalizer, derive_item_url
from salesfeed.transformers.price_filter import ItemFilter, to_cents
from tests.factories import make_event


def event(item_price, amount_paid, utc_date=1000, **overrides):
    return RawEvent.parse_obj(make_event(utc_date, item_price=item_price, amount_paid=amount_paid, **overrides))


class TestItemFilter:
    """Test the overpayment rule"""

    def test_accepts_overpayment(self):
        assert ItemFilter().accept(event(5.00, 5.01)) is True

    def test_rejects_exact_price(self):
        assert ItemFilter().accept(event(5.00, 5.00)) is False

    def test_rejects_underpayment(self):
        assert ItemFilter().accept(event(10.00, 9.99)) is False

    def test_sub_cent_difference_is_not_an_overpayment(self):
        """Amounts are compared after rounding to cents"""
        assert ItemFilter().accept(event(5.001, 5.004)) is False
        assert ItemFilter().accept(event(1.0, 1.0000001)) is False

    def test_float_noise_does_not_flip_the_result(self):
        # 0.1 + 0.2 == 0.30000000000000004
        assert ItemFilter().accept(event(0.3, 0.1 + 0.2)) is False

    @pytest.mark.parametrize(
        "item_price,amount_paid",
        [
            (0.0, 0.0),
            (0.0, 0.01),
            (1.005, 1.01),
            (2.675, 2.68),
            (7.0, 7.004),
            (7.0, 7.006),
            (99.99, 100.0),
            (12.345, 12.344),
        ],
    )
    def test_matches_rounded_comparison(self, item_price, amount_paid):
        expected = round(amount_paid, 2) > round(item_price, 2)
        assert ItemFilter().accept(event(item_price, amount_paid)) is expected

    def test_to_cents_uses_two_decimals(self):
        assert str(to_cents(5)) == "5.00"
        assert str(to_cents(7.006)) == "7.01"


class TestEventNormalizer:
    """Test event -> item conversion"""

    def test_protocol_relative_url_becomes_https(self):
        assert derive_item_url("//a.bandcamp.com/album/x") == "https://a.bandcamp.com/album/x"

    def test_http_url_becomes_https(self):
        assert derive_item_url("http://a.bandcamp.com/track/y") == "https://a.bandcamp.com/track/y"

    def test_url_without_scheme_gets_prefix(self):
        assert derive_item_url("a.bandcamp.com/album/x") == "https://a.bandcamp.com/album/x"

    def test_normalize_maps_fields(self, raw_event):
        item = EventNormalizer().normalize(raw_event)

        assert item.url == "https://artist1000.bandcamp.com/album/record"
        assert item.artist == "Artist 1000"
        assert item.title == "Record"
        assert item.description == "Digital Album"
        assert item.art_url == "https://f4.bcbits.com/img/a1000_7.jpg"
        assert item.utc_date == 1000

    def test_normalized_item_is_not_enriched(self, raw_event):
        item = EventNormalizer().normalize(raw_event)

        assert item.tags is None
        assert item.colors is None
        assert item.background_color is None
        assert item.text_color is None

    def test_normalize_handles_missing_optional_fields(self):
        raw = RawEvent(item_price=1.0, amount_paid=2.0, url="//x.bandcamp.com/album/y", utc_date=5)

        item = EventNormalizer().normalize(raw)

        assert item.artist is None
        assert item.title is None
        assert item.art_url is None
