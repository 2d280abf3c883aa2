"""Tests for table and JSON output."""

import asyncio
import json
from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from fare_horizon.engine import RecommendationEngine
from fare_horizon.formatter import (
    describe_offer,
    format_php,
    print_recommendations,
    print_trend,
    recommendations_to_json,
    trend_to_json,
)
from fare_horizon.models import Passengers
from tests.mock_data import StaticOfferSource, make_countries, make_offer, make_query, make_raw_offer


@pytest.fixture
def recs():
    countries, airports = make_countries("JP")
    source = StaticOfferSource(lambda m, d, dest: [make_raw_offer(dest, 12_345)])
    engine = RecommendationEngine(source, countries=countries, country_airports=airports, fx_rate=1.0)
    return asyncio.run(engine.get_monthly_recommendations(make_query()))


@pytest.fixture
def series():
    source = StaticOfferSource(lambda m, d, dest: [] if m == 0 else [make_raw_offer(dest, 10_000 + m)])
    engine = RecommendationEngine(source, fx_rate=1.0)
    return asyncio.run(engine.get_yearly_trend(make_query(), "NRT"))


def capture(fn, *args, **kwargs) -> str:
    buf = StringIO()
    with patch("fare_horizon.formatter.console", Console(file=buf, no_color=True, width=200)):
        fn(*args, **kwargs)
    return buf.getvalue()


def test_format_php():
    assert format_php(12345) == "₱12,345"
    assert format_php(None) == "–"


def test_describe_offer():
    assert describe_offer(make_offer("NRT", 9_000)) == "Philippine Airlines · MNL → NRT · nonstop"
    assert describe_offer(make_offer("SFO", 40_000, via=["HKG"], carrier="CX")) == (
        "Cathay Pacific · MNL → SFO · 2 stops"
    )


def test_print_recommendations(recs):
    output = capture(print_recommendations, recs, Passengers(adults=2))
    assert "Country JP" in output
    assert "₱12,345" in output
    assert "Jan" in output and "Dec" in output
    assert "2 adults" in output


def test_print_recommendations_with_insights(recs):
    output = capture(print_recommendations, recs[:1], insights={0: "Sakura season."})
    assert "Sakura season." in output


def test_print_recommendations_empty():
    output = capture(print_recommendations, [])
    assert "No recommendations" in output


def test_print_trend(series):
    output = capture(print_trend, series, "NRT")
    assert "NRT" in output
    assert "₱10,001" in output
    assert "LOW" in output  # January had no offer


def test_recommendations_json(recs):
    data = json.loads(recommendations_to_json(recs))
    assert len(data) == 12
    assert data[0]["country"]["code"] == "JP"
    assert data[0]["cheapest"]["price"]["total_php"] == 12_345
    assert data[0]["recommended"]["validation"]["status"] == "VALID"


def test_trend_json(series):
    data = json.loads(trend_to_json(series))
    assert len(data) == 12
    assert data[0]["cheapest"] is None
    assert data[1]["month"] == "2026-02"
    assert data[1]["verified"] is None
