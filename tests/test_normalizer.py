"""Unit tests for the quote normalizer."""
import pytest

from portfolio_tracker.providers.core import (MalformedResponse, QuoteFields,
                                              compute_change_percent,
                                              normalize_quote, parse_number)
from portfolio_tracker.schemas import QuoteSource, ReferenceData
from tests.conftest import MARKET_OPEN_AT


def _normalize(fields: QuoteFields, reference: ReferenceData | None = None):
    return normalize_quote(
        "uwmc",
        fields,
        source=QuoteSource.FINNHUB,
        reference=reference or ReferenceData(),
        captured_at=MARKET_OPEN_AT,
        is_market_open=True,
    )


class TestParseNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (5.25, 5.25),
            ("5.25", 5.25),
            ("2.9412%", 2.9412),
            (" -1.5% ", -1.5),
            ("1,234.5", 1234.5),
            (3, 3.0),
        ],
    )
    def test_parses_numeric_forms(self, raw, expected):
        assert parse_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "None", "abc", float("nan"), float("inf"), True])
    def test_unparseable_is_none(self, raw):
        assert parse_number(raw) is None


class TestChangePercent:
    def test_relative_to_previous_close(self):
        assert compute_change_percent(0.15, 5.10) == pytest.approx(2.941176, rel=1e-6)

    def test_zero_previous_close_is_zero(self):
        assert compute_change_percent(1.0, 0) == 0.0


class TestNormalizeQuote:
    def test_uppercases_symbol_and_tags_source(self):
        quote = _normalize(QuoteFields(price=5.25, previous_close=5.10))
        assert quote.symbol == "UWMC"
        assert quote.source is QuoteSource.FINNHUB
        assert quote.timestamp == MARKET_OPEN_AT

    def test_documented_defaults(self):
        ref = ReferenceData(shares_outstanding=1_000_000, avg_volume=42, week52_high=9, week52_low=2)
        quote = _normalize(QuoteFields(price=5.0, previous_close=4.0), ref)
        assert quote.day_high == 5.0
        assert quote.day_low == 5.0
        assert quote.bid == 5.0
        assert quote.ask == 5.0
        assert quote.open == 4.0
        assert quote.change == pytest.approx(1.0)
        assert quote.avg_volume == 42
        assert quote.market_cap == 5_000_000
        assert quote.week52_high == 9
        assert quote.week52_low == 2
        assert quote.volume is None
        assert quote.bid_size is None
        assert quote.ask_size is None
        assert quote.pe_ratio is None

    def test_reported_zero_volume_is_kept(self):
        quote = _normalize(QuoteFields(price=5.25, previous_close=5.10, volume=0, bid_size=0))
        assert quote.volume == 0
        assert quote.bid_size == 0

    def test_provider_change_kept_but_percent_recomputed(self):
        quote = _normalize(QuoteFields(price=5.25, previous_close=5.10, change=0.15))
        assert quote.change == 0.15
        assert quote.change_percent == pytest.approx(0.15 / 5.10 * 100)

    def test_zero_previous_close_yields_zero_percent(self):
        quote = _normalize(QuoteFields(price=5.25, previous_close=0))
        assert quote.change_percent == 0.0

    @pytest.mark.parametrize(
        "fields",
        [
            QuoteFields(previous_close=5.10),
            QuoteFields(price=5.25),
            QuoteFields(price=0, previous_close=0),
        ],
    )
    def test_missing_or_zero_price_is_malformed(self, fields):
        with pytest.raises(MalformedResponse):
            _normalize(fields)

    def test_idempotent_for_fixed_payload(self):
        fields = QuoteFields(price=5.25, previous_close=5.10, day_high=5.4, volume=1000)
        assert _normalize(fields) == _normalize(fields)
