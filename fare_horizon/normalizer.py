"""Convert raw search results into canonical offers."""

import math
import uuid
from datetime import datetime, timezone
from typing import Optional

from .config import USD_TO_PHP
from .models import OfferCanonical, OfferMeta, OfferPrice, Passengers, RawOffer, ValidationVerdict


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero for positive amounts."""
    return int(math.floor(value + 0.5))


def passenger_multiplier(passengers: Passengers) -> float:
    return passengers.multiplier()


def _new_offer_id() -> str:
    return f"offer-{uuid.uuid4().hex[:9]}"


def normalize_offer(
    raw: RawOffer,
    fx_rate: float = USD_TO_PHP,
    now: Optional[datetime] = None,
) -> OfferCanonical:
    """
    Build a canonical offer from a raw one.

    The USD total is rounded first and the PHP total is rounded again after
    conversion, so PHP = round(round(base * multiplier) * fx_rate).
    """
    now = now or datetime.now(timezone.utc)
    total_usd = round_half_up(raw.base_price_usd * passenger_multiplier(raw.passengers))

    return OfferCanonical(
        id=_new_offer_id(),
        provider=raw.provider,
        trip_type=raw.trip_type,
        origin_iata=raw.origin,
        destination_iata=raw.destination,
        depart_date=raw.depart_date,
        return_date=raw.return_date,
        passengers=raw.passengers,
        cabin=raw.cabin,
        price=OfferPrice(
            total=total_usd,
            currency="USD",
            total_php=round_half_up(total_usd * fx_rate),
            fx_rate=fx_rate,
            fx_timestamp=now.isoformat(),
            includes_taxes_and_fees=True,
        ),
        slices=tuple(raw.slices),
        meta=OfferMeta(
            is_separate_tickets=raw.is_separate_tickets,
            is_lcc=raw.is_lcc,
            baggage_unknown=False,
        ),
        validation=ValidationVerdict(),
    )
