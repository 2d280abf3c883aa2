"""Output formatting for monthly recommendations and price trends."""

import json
from dataclasses import asdict
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import MONTH_NAMES, airline_name
from .models import HIGH, LOW, MEDIUM, MarketPricePoint, MonthRecommendation, OfferCanonical, Passengers
from .scoring import total_stops

console = Console()

CONFIDENCE_STYLES = {
    HIGH: "green",
    MEDIUM: "yellow",
    LOW: "red",
}


def format_php(amount: Optional[float]) -> str:
    """Format a PHP amount with no decimals, e.g. ₱12,345."""
    if amount is None:
        return "–"
    return f"₱{amount:,.0f}"


def describe_offer(offer: OfferCanonical) -> str:
    """Carrier and routing in a few words."""
    carrier = airline_name(offer.outbound_carrier) if offer.outbound_carrier else "Unknown airline"
    stops = total_stops(offer)
    stops_str = "nonstop" if stops == 0 else f"{stops} stop{'s' if stops != 1 else ''}"
    return f"{carrier} · {offer.origin_iata} → {offer.destination_iata} · {stops_str}"


def print_recommendations(
    recs: list[MonthRecommendation],
    passengers: Optional[Passengers] = None,
    insights: Optional[dict[int, str]] = None,
) -> None:
    """Print one row per recommended month."""
    if not recs:
        console.print("[dim]No recommendations: no month had a valid offer.[/dim]")
        return

    table = Table(
        title="Monthly Destination Picks",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Month", no_wrap=True)
    table.add_column("Country")
    table.add_column("Dates", no_wrap=True)
    table.add_column("Cheapest", justify="right", style="green")
    table.add_column("Recommended", justify="right", style="bold")
    table.add_column("Itinerary")
    table.add_column("Confidence", justify="center")
    table.add_column("Verified", justify="center")
    if insights:
        table.add_column("Why go")

    for rec in recs:
        confidence = rec.recommended.validation.confidence
        verified = "✓" if rec.is_user_verified else "–"
        if rec.is_user_verified and rec.verified_price:
            verified = f"✓ {format_php(rec.verified_price)}"

        row = [
            MONTH_NAMES[rec.month][:3],
            f"{rec.country.flag} {rec.country.name}",
            f"{rec.recommended.depart_date} → {rec.recommended.return_date or 'one way'}",
            format_php(rec.cheapest.price.total_php),
            format_php(rec.recommended.price.total_php),
            describe_offer(rec.recommended),
            Text(confidence, style=CONFIDENCE_STYLES.get(confidence, "white")),
            verified,
        ]
        if insights:
            row.append(insights.get(rec.month, ""))
        table.add_row(*row)

    console.print(table)
    if passengers:
        console.print(f"[dim]Prices are totals for {passengers.summary()}.[/dim]\n")


def print_trend(series: list[MarketPricePoint], destination: str) -> None:
    """Print a 12-month price trend table."""
    table = Table(
        title=f"Price Trend → {destination}",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Month")
    table.add_column("Cheapest", justify="right", style="green")
    table.add_column("Recommended", justify="right")
    table.add_column("Verified", justify="right", style="yellow")
    table.add_column("Confidence", justify="center")

    prices = [p.cheapest for p in series if p.cheapest is not None]
    low = min(prices) if prices else None

    for point in series:
        cheapest = Text(format_php(point.cheapest))
        if low is not None and point.cheapest == low:
            cheapest.stylize("bold green")
        table.add_row(
            f"{point.month_name} {point.month[:4]}",
            cheapest,
            format_php(point.recommended),
            format_php(point.verified),
            Text(point.confidence, style=CONFIDENCE_STYLES.get(point.confidence, "white")),
        )

    console.print(table)


def recommendations_to_json(recs: list[MonthRecommendation]) -> str:
    return json.dumps([asdict(r) for r in recs], indent=2, ensure_ascii=False)


def trend_to_json(series: list[MarketPricePoint]) -> str:
    return json.dumps([asdict(p) for p in series], indent=2, ensure_ascii=False)
