"""In-memory verification of recommended fares.

A user re-checks an offer on an external site and reports what they saw.
Reports are kept for the session only; the latest report for a month wins.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from .models import MarketPricePoint, MonthRecommendation, VerificationReport

logger = logging.getLogger(__name__)

CHEAPEST = "CHEAPEST"
RECOMMENDED = "RECOMMENDED"
OFFER_TYPES = (CHEAPEST, RECOMMENDED)


def build_report(
    rec: MonthRecommendation,
    offer_type: str,
    price_seen_php: Optional[float] = None,
    same_dates_confirmed: bool = True,
    prefill_failed: bool = False,
    notes: Optional[str] = None,
) -> VerificationReport:
    """Build a report for one of a recommendation's two offers."""
    if offer_type not in OFFER_TYPES:
        raise ValueError(f"Unknown offer type {offer_type!r}. Choose from: {', '.join(OFFER_TYPES)}")

    offer = rec.cheapest if offer_type == CHEAPEST else rec.recommended
    return VerificationReport(
        id=f"report-{uuid.uuid4().hex[:9]}",
        month=rec.month,
        offer_id=offer.id,
        offer_type=offer_type,
        origin_iata=offer.origin_iata,
        destination_iata=offer.destination_iata,
        depart_date=offer.depart_date,
        return_date=offer.return_date,
        cabin=offer.cabin,
        passengers=offer.passengers,
        app_price_php=offer.price.total_php,
        same_dates_confirmed=same_dates_confirmed,
        created_at=datetime.now(timezone.utc).isoformat(),
        price_seen_php=price_seen_php,
        prefill_failed=prefill_failed,
        notes=notes,
    )


class VerificationDesk:
    """Applies verification reports to the session's monthly recommendations."""

    def __init__(self, recommendations: list[MonthRecommendation]):
        self._by_month = {rec.month: rec for rec in recommendations}
        self._reports: list[VerificationReport] = []

    def record(self, report: VerificationReport) -> MonthRecommendation:
        """Store *report* and mark its month's recommendation as verified."""
        rec = self._by_month.get(report.month)
        if rec is None:
            raise KeyError(f"No recommendation for month {report.month}")

        self._reports.append(report)
        rec.is_user_verified = report.same_dates_confirmed
        rec.verified_type = report.offer_type
        rec.verified_price = report.price_seen_php or rec.verified_price
        rec.verified_at = report.created_at

        logger.info(
            f"Verified {report.offer_type.lower()} offer for month {report.month}: "
            f"app {report.app_price_php} PHP, seen {report.price_seen_php}"
        )
        return rec

    def reports_for(self, month: int) -> list[VerificationReport]:
        return [r for r in self._reports if r.month == month]

    @property
    def reports(self) -> list[VerificationReport]:
        return list(self._reports)


def apply_verified_prices(
    series: list[MarketPricePoint],
    recommendations: list[MonthRecommendation],
    year: int,
    destination_iata: str,
) -> list[MarketPricePoint]:
    """
    Copy of *series* with user-verified prices filled in where known.

    Only months whose verified offer (cheapest or recommended, per
    ``verified_type``) flies to *destination_iata* are merged.
    """
    destination_iata = destination_iata.upper()
    verified = {}
    for rec in recommendations:
        if not rec.is_user_verified or rec.verified_price is None:
            continue
        offer = rec.cheapest if rec.verified_type == CHEAPEST else rec.recommended
        if offer.destination_iata != destination_iata:
            continue
        verified[f"{year}-{rec.month + 1:02d}"] = rec.verified_price

    return [
        replace(point, verified=verified[point.month]) if point.month in verified else point
        for point in series
    ]
