"""Stand-in offer source that fabricates plausible (and sometimes broken) fares.

Long-haul routes occasionally get an impossible low-cost fare so the
validator's quarantine rules have something to catch. A real provider
should not inject faults.
"""

import logging
import random
from datetime import date, datetime, timedelta
from typing import Optional

from ..config import AIRLINES, LONG_HAUL_AIRPORTS, SHORT_HAUL_LCC_CARRIERS
from ..models import FlightSegment, FlightSlice, RawOffer, TrackedQuery
from .base import OfferSource

logger = logging.getLogger(__name__)

LONG_HAUL_HUB = "HKG"
LONG_HAUL_FIRST_LEG_MIN = 150
LONG_HAUL_SECOND_LEG_MIN = 750
SHORT_HAUL_MIN = 200
LAYOVER_MIN = 120

FAULT_PRICE_USD = 150.0
FAULT_CARRIER = "5J"


def carrier_for_airline(airline: str) -> str:
    """Rough airline name -> IATA code map, Philippine Airlines by default."""
    if "Cebu" in airline:
        return "5J"
    if "AirAsia" in airline:
        return "AK"
    if "Singapore" in airline:
        return "SQ"
    if "Japan" in airline:
        return "JL"
    return "PR"


def _iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%S")


def build_slice(
    direction: str,
    from_iata: str,
    to_iata: str,
    carrier: str,
    flight_number: int,
    day: date,
    long_haul: bool,
) -> FlightSlice:
    """One direction of travel; long-haul slices connect through a hub."""
    depart = datetime.combine(day, datetime.min.time()).replace(hour=10)

    if not long_haul:
        arrive = depart + timedelta(minutes=SHORT_HAUL_MIN)
        return FlightSlice(direction, (
            FlightSegment(carrier, f"{carrier}{flight_number}", from_iata, to_iata,
                          _iso(depart), _iso(arrive), SHORT_HAUL_MIN),
        ))

    hub_arrive = depart + timedelta(minutes=LONG_HAUL_FIRST_LEG_MIN)
    hub_depart = hub_arrive + timedelta(minutes=LAYOVER_MIN)
    arrive = hub_depart + timedelta(minutes=LONG_HAUL_SECOND_LEG_MIN)
    return FlightSlice(direction, (
        FlightSegment(carrier, f"{carrier}{flight_number}", from_iata, LONG_HAUL_HUB,
                      _iso(depart), _iso(hub_arrive), LONG_HAUL_FIRST_LEG_MIN),
        FlightSegment(carrier, f"{carrier}{flight_number + 1000}", LONG_HAUL_HUB, to_iata,
                      _iso(hub_depart), _iso(arrive), LONG_HAUL_SECOND_LEG_MIN),
    ))


class MockOfferSource(OfferSource):
    """Random round-trip offers; pass a seed for reproducible runs."""

    def __init__(
        self,
        seed: Optional[int] = None,
        fault_rate: float = 0.1,
        offers_per_call: int = 3,
        rng: Optional[random.Random] = None,
    ):
        self.rng = rng or random.Random(seed)
        self.fault_rate = fault_rate
        self.offers_per_call = offers_per_call

    @property
    def source_name(self) -> str:
        return "mock"

    async def fetch_offers(
        self,
        query: TrackedQuery,
        month: int,
        day: int,
        destination_iata: str,
        destination_city: str,
        year: int,
    ) -> list[RawOffer]:
        depart = date(year, month + 1, day)
        ret = depart + timedelta(days=query.trip_length_nights)
        long_haul = destination_iata in LONG_HAUL_AIRPORTS

        offers = []
        for i in range(self.offers_per_call):
            carrier = carrier_for_airline(self.rng.choice(AIRLINES))

            if long_haul:
                base_price = 700 + self.rng.random() * 1000
            else:
                base_price = 200 + self.rng.random() * 800

            if long_haul and self.rng.random() < self.fault_rate:
                base_price = FAULT_PRICE_USD
                carrier = FAULT_CARRIER
                logger.debug(f"mock: injecting faulty {carrier} fare to {destination_iata} on {depart}")

            offers.append(RawOffer(
                origin=query.origin,
                destination=destination_iata,
                destination_city=destination_city,
                depart_date=depart.isoformat(),
                return_date=ret.isoformat(),
                passengers=query.passengers,
                cabin=query.cabin,
                base_price_usd=base_price,
                slices=(
                    build_slice("outbound", query.origin, destination_iata, carrier, 100 + i, depart, long_haul),
                    build_slice("inbound", destination_iata, query.origin, carrier, 200 + i, ret, long_haul),
                ),
                is_lcc=carrier in SHORT_HAUL_LCC_CARRIERS,
            ))

        return offers
