"""Monthly recommendation engine and yearly price-trend builder."""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .config import (
    COUNTRIES,
    COUNTRY_AIRPORTS,
    DIVERSITY_CAP,
    HORIZON_YEAR,
    MONTH_NAMES,
    SAMPLES_PER_MONTH,
    TREND_RECOMMENDED_PREMIUM,
    TREND_SAMPLE_DAY,
    USD_TO_PHP,
)
from .models import (
    LOW,
    AirportInfo,
    Country,
    MarketPricePoint,
    MonthRecommendation,
    OfferCanonical,
    TrackedQuery,
)
from .normalizer import normalize_offer, round_half_up
from .providers.base import OfferSource
from .scoring import ScoringWeights, pick_cheapest, pick_recommended
from .validator import validate_offer

logger = logging.getLogger(__name__)


@dataclass
class CountryCandidate:
    """A country's best offers for one month."""
    country: Country
    cheapest: OfferCanonical
    recommended: OfferCanonical
    score: float  # score of the recommended offer


class CountryUsage:
    """How many months each country has won during one 12-month build."""

    def __init__(self, cap: int = DIVERSITY_CAP):
        self.cap = cap
        self._counts: dict[str, int] = defaultdict(int)

    def count(self, code: str) -> int:
        return self._counts.get(code, 0)

    def has_room(self, code: str) -> bool:
        return self.count(code) < self.cap

    def record(self, code: str) -> None:
        self._counts[code] += 1


def sample_days(samples: int = SAMPLES_PER_MONTH) -> list[int]:
    """Departure days spread across a month: 1, 7, 14, 21, 28 for five samples."""
    if samples <= 1:
        return [1]
    return [min(28, 1 + math.floor(i / (samples - 1) * 27)) for i in range(samples)]


def pick_winner(
    candidates: list[CountryCandidate],
    usage: CountryUsage,
    diversify: bool,
) -> CountryCandidate:
    """
    Best-scored candidate, or with *diversify* the best one whose country
    still has room under the cap. Falls back to the overall best when every
    candidate country is capped.
    """
    ranked = sorted(candidates, key=lambda c: (c.score, c.country.code))
    if diversify:
        for cand in ranked:
            if usage.has_room(cand.country.code):
                return cand
    return ranked[0]


class RecommendationEngine:
    """Turns raw offers into one recommended country per month."""

    def __init__(
        self,
        source: OfferSource,
        countries: Optional[list[Country]] = None,
        country_airports: Optional[dict[str, list[AirportInfo]]] = None,
        weights: ScoringWeights = ScoringWeights(),
        fx_rate: float = USD_TO_PHP,
        year: int = HORIZON_YEAR,
        diversity_cap: int = DIVERSITY_CAP,
        samples_per_month: int = SAMPLES_PER_MONTH,
    ):
        self.source = source
        self.countries = countries if countries is not None else COUNTRIES
        self.country_airports = country_airports if country_airports is not None else COUNTRY_AIRPORTS
        self.weights = weights
        self.fx_rate = fx_rate
        self.year = year
        self.diversity_cap = diversity_cap
        self.samples_per_month = samples_per_month

    async def _valid_offers(
        self,
        query: TrackedQuery,
        month: int,
        day: int,
        airport: AirportInfo,
    ) -> list[OfferCanonical]:
        raw_offers = await self.source.fetch_offers(
            query, month, day, airport.iata, airport.city, self.year
        )
        valid = []
        for raw in raw_offers:
            offer = validate_offer(normalize_offer(raw, fx_rate=self.fx_rate))
            if offer.is_valid:
                valid.append(offer)
        return valid

    async def country_candidate(
        self,
        query: TrackedQuery,
        month: int,
        country: Country,
    ) -> Optional[CountryCandidate]:
        """Cheapest and best-scored valid offers for a country, or None if it has none."""
        offers: list[OfferCanonical] = []
        for day in sample_days(self.samples_per_month):
            for airport in self.country_airports.get(country.code, []):
                offers.extend(await self._valid_offers(query, month, day, airport))

        if not offers:
            logger.debug(f"{country.code}: no valid offers in {MONTH_NAMES[month]}")
            return None

        recommended, score = pick_recommended(offers, self.weights)
        return CountryCandidate(
            country=country,
            cheapest=pick_cheapest(offers),
            recommended=recommended,
            score=score,
        )

    async def get_monthly_recommendations(self, query: TrackedQuery) -> list[MonthRecommendation]:
        """
        One recommendation per month that has at least one valid offer.

        Offers are fetched fresh on every call. The diversification counter
        lives only for the duration of this call.
        """
        usage = CountryUsage(self.diversity_cap)
        recommendations: list[MonthRecommendation] = []

        for month in range(12):
            candidates = []
            for country in self.countries:
                cand = await self.country_candidate(query, month, country)
                if cand is not None:
                    candidates.append(cand)

            if not candidates:
                logger.info(f"No valid offers from {query.origin} in {MONTH_NAMES[month]}, skipping")
                continue

            winner = pick_winner(candidates, usage, query.diversify)
            usage.record(winner.country.code)
            logger.debug(
                f"{MONTH_NAMES[month]}: {winner.country.name} "
                f"(score {winner.score:.3f}, {len(candidates)} candidates)"
            )

            recommendations.append(MonthRecommendation(
                month=month,
                country=winner.country,
                cheapest=winner.cheapest,
                recommended=winner.recommended,
                last_refreshed=datetime.now(timezone.utc).isoformat(),
            ))

        logger.info(f"Built {len(recommendations)} monthly recommendations from {query.origin}")
        return recommendations

    def city_for(self, iata: str) -> str:
        """City served by *iata* in the configured airport table, or the code itself."""
        for airports in self.country_airports.values():
            for airport in airports:
                if airport.iata == iata:
                    return airport.city
        return iata

    async def get_yearly_trend(self, query: TrackedQuery, destination_iata: str) -> list[MarketPricePoint]:
        """
        Twelve monthly price points for one destination.

        Each point samples a single mid-month offer; the recommended price is
        that fare plus a fixed premium, not a separately scored offer.
        """
        destination_iata = destination_iata.upper()
        destination_city = self.city_for(destination_iata)
        series: list[MarketPricePoint] = []

        for month in range(12):
            raw_offers = await self.source.fetch_offers(
                query, month, TREND_SAMPLE_DAY, destination_iata, destination_city, self.year
            )
            now = datetime.now(timezone.utc).isoformat()
            cheapest: Optional[int] = None
            recommended: Optional[int] = None
            confidence = LOW

            if raw_offers:
                offer = validate_offer(normalize_offer(raw_offers[0], fx_rate=self.fx_rate))
                cheapest = offer.price.total_php
                recommended = round_half_up(cheapest * TREND_RECOMMENDED_PREMIUM)
                confidence = offer.validation.confidence
            else:
                logger.debug(f"Trend: no offers to {destination_iata} in {MONTH_NAMES[month]}")

            series.append(MarketPricePoint(
                month=f"{self.year}-{month + 1:02d}",
                month_name=MONTH_NAMES[month][:3],
                cheapest=cheapest,
                recommended=recommended,
                verified=None,
                confidence=confidence,
                updated_at=now,
            ))

        return series
