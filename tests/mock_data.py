"""Raw offers, canonical offers and a scripted offer source for tests."""

from datetime import datetime, timezone
from typing import Callable, Optional

from fare_horizon.models import (
    AirportInfo,
    Country,
    FlightSegment,
    FlightSlice,
    OfferCanonical,
    Passengers,
    RawOffer,
    TrackedQuery,
)
from fare_horizon.normalizer import normalize_offer
from fare_horizon.providers.base import OfferSource

FIXED_NOW = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)

# Loosely-typed payload the way an external provider would send it
RAW_PAYLOAD = {
    "origin": "mnl",
    "dest": "nrt",
    "city": "Tokyo",
    "departDate": "2026-03-07",
    "returnDate": "2026-03-12",
    "passengers": {"adults": 2, "children": 1, "infantsInSeat": 0, "infantsOnLap": 1},
    "cabin": "ECONOMY",
    "basePriceUsd": "320.5",
    "isLcc": False,
    "slices": [
        {
            "direction": "outbound",
            "segments": [
                {
                    "carrierIata": "PR",
                    "flightNumber": "PR432",
                    "fromIata": "MNL",
                    "toIata": "NRT",
                    "departAt": "2026-03-07T10:00:00",
                    "arriveAt": "2026-03-07T15:20:00",
                    "durationMin": 260,
                }
            ],
        },
        {
            "direction": "inbound",
            "segments": [
                {
                    "carrierIata": "PR",
                    "flightNumber": "PR431",
                    "fromIata": "NRT",
                    "toIata": "MNL",
                    "departAt": "2026-03-12T09:30:00",
                    "arriveAt": "2026-03-12T13:40:00",
                    "durationMin": 310,
                }
            ],
        },
    ],
}


def make_slice(
    direction: str,
    route: list[str],
    carrier: str = "PR",
    leg_minutes: int = 200,
) -> FlightSlice:
    """Connected slice through the airports in *route*, e.g. ["MNL", "HKG", "SFO"]."""
    segments = tuple(
        FlightSegment(
            carrier_iata=carrier,
            flight_number=f"{carrier}{100 + i}",
            from_iata=a,
            to_iata=b,
            depart_at="2026-03-07T10:00:00",
            arrive_at="2026-03-07T15:00:00",
            duration_min=leg_minutes,
        )
        for i, (a, b) in enumerate(zip(route, route[1:]))
    )
    return FlightSlice(direction, segments)


def round_trip_slices(
    origin: str,
    destination: str,
    carrier: str = "PR",
    via: Optional[list[str]] = None,
    leg_minutes: int = 200,
) -> tuple[FlightSlice, ...]:
    via = via or []
    return (
        make_slice("outbound", [origin, *via, destination], carrier, leg_minutes),
        make_slice("inbound", [destination, *reversed(via), origin], carrier, leg_minutes),
    )


def make_raw_offer(
    destination: str = "NRT",
    base_price_usd: float = 300.0,
    carrier: str = "PR",
    origin: str = "MNL",
    slices: Optional[tuple[FlightSlice, ...]] = None,
    passengers: Optional[Passengers] = None,
    trip_type: str = "round_trip",
    via: Optional[list[str]] = None,
    leg_minutes: int = 200,
) -> RawOffer:
    if slices is None:
        slices = round_trip_slices(origin, destination, carrier, via, leg_minutes)
    return RawOffer(
        origin=origin,
        destination=destination,
        destination_city="Somewhere",
        depart_date="2026-03-07",
        return_date="2026-03-12" if trip_type == "round_trip" else None,
        passengers=passengers or Passengers(),
        cabin="ECONOMY",
        base_price_usd=base_price_usd,
        slices=slices,
        trip_type=trip_type,
    )


def make_offer(destination: str = "NRT", price_php: int = 10_000, **kwargs) -> OfferCanonical:
    """Canonical offer whose displayed price is exactly *price_php* (FX rate 1.0)."""
    return normalize_offer(
        make_raw_offer(destination, base_price_usd=price_php, **kwargs),
        fx_rate=1.0,
        now=FIXED_NOW,
    )


def make_query(diversify: bool = True, **kwargs) -> TrackedQuery:
    return TrackedQuery(origin="MNL", diversify=diversify, **kwargs)


def make_countries(*codes: str) -> tuple[list[Country], dict[str, list[AirportInfo]]]:
    """One country per code, each with a single airport named after it (AA -> AAA)."""
    countries = [Country(code, f"Country {code}", "🏳") for code in codes]
    airports = {code: [AirportInfo(f"City {code}", code + code[0])] for code in codes}
    return countries, airports


OffersFor = Callable[[int, int, str], list[RawOffer]]


class StaticOfferSource(OfferSource):
    """Returns whatever *offers_for(month, day, destination)* gives and logs each call."""

    def __init__(self, offers_for: OffersFor):
        self.offers_for = offers_for
        self.calls: list[tuple[int, int, str]] = []
        self.cities: list[str] = []

    @property
    def source_name(self) -> str:
        return "static"

    async def fetch_offers(self, query, month, day, destination_iata, destination_city, year):
        self.calls.append((month, day, destination_iata))
        self.cities.append(destination_city)
        return list(self.offers_for(month, day, destination_iata))
