"""Offer scoring: a single comparable number per offer, lower is better."""

from dataclasses import dataclass
from typing import Optional

from .config import (
    DURATION_NORMALIZER,
    PRICE_NORMALIZER,
    PRICE_WEIGHT,
    QUALITY_WEIGHT,
    STOP_PENALTY,
)
from .models import OfferCanonical


@dataclass(frozen=True)
class ScoringWeights:
    """Blend between price and itinerary quality."""
    price: float = PRICE_WEIGHT
    quality: float = QUALITY_WEIGHT


def _scored_slices(offer: OfferCanonical):
    return [s for s in (offer.outbound, offer.inbound) if s is not None]


def total_stops(offer: OfferCanonical) -> int:
    return sum(s.stops_count for s in _scored_slices(offer))


def total_duration_min(offer: OfferCanonical) -> int:
    return sum(s.total_duration_min for s in _scored_slices(offer))


def score_offer(
    offer: OfferCanonical,
    price_weight: float = PRICE_WEIGHT,
    quality_weight: float = QUALITY_WEIGHT,
) -> float:
    """
    Linear blend of normalized price and itinerary quality.

    price part:   PHP total / 50,000
    quality part: 5 per stop + total minutes / 600

    Scoring says nothing about validity; callers filter quarantined offers first.
    """
    norm_price = offer.price.total_php / PRICE_NORMALIZER
    norm_quality = total_stops(offer) * STOP_PENALTY + total_duration_min(offer) / DURATION_NORMALIZER
    return price_weight * norm_price + quality_weight * norm_quality


def pick_cheapest(offers: list[OfferCanonical]) -> Optional[OfferCanonical]:
    if not offers:
        return None
    return min(offers, key=lambda o: o.price.total_php)


def pick_recommended(
    offers: list[OfferCanonical],
    weights: ScoringWeights = ScoringWeights(),
) -> Optional[tuple[OfferCanonical, float]]:
    """Best-scored offer and its score. Ties keep the earliest offer."""
    if not offers:
        return None
    scored = [(o, score_offer(o, weights.price, weights.quality)) for o in offers]
    return min(scored, key=lambda pair: pair[1])
