"""Plausibility checks that quarantine suspicious offers.

Validation never raises. Each failed rule appends a reason code to the
offer's verdict; any reason quarantines the offer with LOW confidence.
A separate soft check lowers confidence to MEDIUM for fares that are
cheap enough to be doubtful but not impossible.

Verdicts only move downwards: VALID -> QUARANTINED and HIGH -> MEDIUM -> LOW.
"""

import logging
from dataclasses import replace
from typing import AbstractSet

from .config import (
    LONG_HAUL_AIRPORTS,
    LONG_HAUL_PRICE_FLOOR,
    SHORT_HAUL_LCC_CARRIERS,
    SOFT_OUTLIER_ALLOWLIST,
    SOFT_OUTLIER_FLOOR,
)
from .models import HIGH, LOW, MEDIUM, QUARANTINED, OfferCanonical, ValidationVerdict

logger = logging.getLogger(__name__)

INVALID_CARRIER_FOR_DISTANCE = "INVALID_CARRIER_FOR_DISTANCE"
OUTLIER_HARD_PRICE_TOO_LOW = "OUTLIER_HARD_PRICE_TOO_LOW"
MISSING_INBOUND_SLICE = "MISSING_INBOUND_SLICE"
INVALID_SEGMENT_CONNECTION = "INVALID_SEGMENT_CONNECTION"

_CONFIDENCE_RANK = {HIGH: 0, MEDIUM: 1, LOW: 2}


def _lower_confidence(current: str, target: str) -> str:
    """Return whichever of the two tiers is less trusting."""
    return target if _CONFIDENCE_RANK[target] > _CONFIDENCE_RANK[current] else current


def find_defects(
    offer: OfferCanonical,
    long_haul: AbstractSet[str] = LONG_HAUL_AIRPORTS,
    lcc_carriers: AbstractSet[str] = SHORT_HAUL_LCC_CARRIERS,
    long_haul_floor: float = LONG_HAUL_PRICE_FLOOR,
) -> list[str]:
    """List the hard-rule reason codes an offer violates, in rule order."""
    reasons: list[str] = []
    price = offer.price.total_php

    if offer.destination_iata in long_haul:
        if offer.outbound_carrier in lcc_carriers:
            reasons.append(INVALID_CARRIER_FOR_DISTANCE)
        if price < long_haul_floor:
            reasons.append(OUTLIER_HARD_PRICE_TOO_LOW)

    if offer.trip_type == "round_trip" and len(offer.slices) < 2:
        reasons.append(MISSING_INBOUND_SLICE)

    for flight_slice in offer.slices:
        segments = flight_slice.segments
        for prev, seg in zip(segments, segments[1:]):
            if prev.to_iata != seg.from_iata:
                reasons.append(INVALID_SEGMENT_CONNECTION)

    return reasons


def is_soft_outlier(
    offer: OfferCanonical,
    floor: float = SOFT_OUTLIER_FLOOR,
    allowlist: AbstractSet[str] = SOFT_OUTLIER_ALLOWLIST,
) -> bool:
    return offer.price.total_php < floor and offer.destination_iata not in allowlist


def validate_offer(
    offer: OfferCanonical,
    long_haul: AbstractSet[str] = LONG_HAUL_AIRPORTS,
    lcc_carriers: AbstractSet[str] = SHORT_HAUL_LCC_CARRIERS,
    long_haul_floor: float = LONG_HAUL_PRICE_FLOOR,
    soft_floor: float = SOFT_OUTLIER_FLOOR,
    soft_allowlist: AbstractSet[str] = SOFT_OUTLIER_ALLOWLIST,
) -> OfferCanonical:
    """Return a copy of *offer* carrying an updated validation verdict."""
    verdict = offer.validation
    reasons = find_defects(offer, long_haul, lcc_carriers, long_haul_floor)

    status = verdict.status
    confidence = verdict.confidence
    if reasons:
        status = QUARANTINED
        confidence = LOW
        logger.debug(
            f"Quarantined {offer.id} {offer.origin_iata}->{offer.destination_iata} "
            f"({offer.price.total_php} PHP): {', '.join(reasons)}"
        )

    if is_soft_outlier(offer, soft_floor, soft_allowlist):
        confidence = _lower_confidence(confidence, MEDIUM)

    # codes already on the verdict are not repeated when an offer is re-validated
    new_codes = tuple(r for r in reasons if r not in verdict.reason_codes)

    return replace(
        offer,
        validation=ValidationVerdict(
            status=status,
            reason_codes=verdict.reason_codes + new_codes,
            confidence=confidence,
        ),
    )
