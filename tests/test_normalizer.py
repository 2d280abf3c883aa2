"""Tests for offer normalization."""

import pytest

from fare_horizon.models import HIGH, VALID, Passengers, RawOffer
from fare_horizon.normalizer import normalize_offer, passenger_multiplier, round_half_up
from tests.mock_data import FIXED_NOW, RAW_PAYLOAD, make_raw_offer


# ── Passengers ───────────────────────────────────────────────────────────────


def test_passenger_multiplier():
    assert passenger_multiplier(Passengers()) == 1.0
    assert passenger_multiplier(Passengers(adults=2, children=2)) == pytest.approx(3.5)
    assert passenger_multiplier(
        Passengers(adults=2, children=1, infants_in_seat=1, infants_on_lap=1)
    ) == pytest.approx(2.95)


def test_passengers_require_an_adult():
    with pytest.raises(ValueError):
        Passengers(adults=0)


def test_passengers_capped_at_nine():
    Passengers(adults=5, children=4)  # exactly 9 is fine
    with pytest.raises(ValueError):
        Passengers(adults=5, children=4, infants_on_lap=1)


def test_passengers_reject_negative_counts():
    with pytest.raises(ValueError):
        Passengers(adults=1, children=-1)


def test_passenger_summary():
    assert Passengers().summary() == "1 adult"
    assert Passengers(adults=2, children=1).summary() == "2 adults, 1 child"
    assert Passengers(adults=1, children=3, infants_in_seat=1, infants_on_lap=1).summary() == (
        "1 adult, 3 children, 2 infants"
    )


# ── Pricing ──────────────────────────────────────────────────────────────────


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_single_adult_price():
    """150 USD -> 150 USD total -> round(150 * 56.45) = 8468 PHP."""
    offer = normalize_offer(make_raw_offer("SFO", 150.0))
    assert offer.price.total == 150
    assert offer.price.total_php == 8468
    assert offer.price.currency == "USD"
    assert offer.price.fx_rate == 56.45
    assert offer.price.includes_taxes_and_fees is True


def test_usd_total_rounded_before_conversion():
    """100.3 USD rounds to 100 before FX, giving 5645 rather than 5662."""
    offer = normalize_offer(make_raw_offer("NRT", 100.3))
    assert offer.price.total == 100
    assert offer.price.total_php == 5645


def test_price_scales_with_passengers():
    raw = make_raw_offer("NRT", 400.0, passengers=Passengers(adults=1, children=1))
    offer = normalize_offer(raw)
    assert offer.price.total == 700
    assert offer.price.total_php == 39515


def test_custom_fx_rate():
    offer = normalize_offer(make_raw_offer("NRT", 300.0), fx_rate=2.0)
    assert offer.price.total_php == 600
    assert offer.price.fx_rate == 2.0


# ── Canonical fields ─────────────────────────────────────────────────────────


def test_verdict_starts_valid_high():
    offer = normalize_offer(make_raw_offer())
    assert offer.validation.status == VALID
    assert offer.validation.confidence == HIGH
    assert offer.validation.reason_codes == ()


def test_fields_copied_from_raw():
    raw = make_raw_offer("ICN", 250.0)
    offer = normalize_offer(raw, now=FIXED_NOW)
    assert offer.origin_iata == "MNL"
    assert offer.destination_iata == "ICN"
    assert offer.depart_date == "2026-03-07"
    assert offer.return_date == "2026-03-12"
    assert offer.trip_type == "round_trip"
    assert offer.provider == "AtlasProvider"
    assert offer.slices == raw.slices
    assert offer.price.fx_timestamp == FIXED_NOW.isoformat()
    assert offer.meta.baggage_unknown is False


def test_ids_are_fresh_per_call():
    raw = make_raw_offer()
    ids = {normalize_offer(raw).id for _ in range(20)}
    assert len(ids) == 20
    assert all(i.startswith("offer-") for i in ids)


# ── Raw payload boundary ─────────────────────────────────────────────────────


def test_raw_offer_from_camel_case_payload():
    raw = RawOffer.from_dict(RAW_PAYLOAD)
    assert raw.origin == "MNL"
    assert raw.destination == "NRT"
    assert raw.destination_city == "Tokyo"
    assert raw.base_price_usd == 320.5
    assert raw.passengers == Passengers(adults=2, children=1, infants_in_seat=0, infants_on_lap=1)
    assert len(raw.slices) == 2
    assert raw.slices[0].segments[0].carrier_iata == "PR"
    assert raw.slices[1].total_duration_min == 310
    assert raw.trip_type == "round_trip"


def test_raw_offer_missing_field():
    payload = dict(RAW_PAYLOAD)
    del payload["departDate"]
    with pytest.raises(ValueError, match="depart_date"):
        RawOffer.from_dict(payload)


def test_raw_offer_non_numeric_price():
    payload = dict(RAW_PAYLOAD, basePriceUsd="cheap")
    with pytest.raises(ValueError, match="not numeric"):
        RawOffer.from_dict(payload)


def test_raw_offer_unknown_cabin():
    payload = dict(RAW_PAYLOAD, cabin="LIE_FLAT")
    with pytest.raises(ValueError, match="cabin"):
        RawOffer.from_dict(payload)


@pytest.mark.parametrize("price", ["nan", "inf", "-inf", -1, "-0.5"])
def test_raw_offer_rejects_non_finite_or_negative_price(price):
    payload = dict(RAW_PAYLOAD, basePriceUsd=price)
    with pytest.raises(ValueError, match="finite non-negative"):
        RawOffer.from_dict(payload)


def test_raw_offer_free_fare_is_accepted():
    assert RawOffer.from_dict(dict(RAW_PAYLOAD, basePriceUsd=0)).base_price_usd == 0


def test_raw_offer_constructor_rejects_nan_price():
    with pytest.raises(ValueError):
        make_raw_offer("NRT", float("nan"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"passengers": "2"},
        {"passengers": {"adults": None}},
        {"slices": "outbound"},
        {"slices": ["outbound"]},
        {"slices": [{"direction": "outbound", "segments": "PR432"}]},
        {"slices": [{"direction": "outbound", "segments": [42]}]},
    ],
)
def test_raw_offer_rejects_malformed_nested_payload(overrides):
    with pytest.raises(ValueError):
        RawOffer.from_dict(dict(RAW_PAYLOAD, **overrides))
