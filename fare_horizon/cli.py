"""fare-horizon CLI - monthly destination picks from a fixed origin."""

import asyncio
import logging
from typing import Annotated, Optional

import typer

from .config import HORIZON_YEAR, MONTH_NAMES, PRICE_WEIGHT, QUALITY_WEIGHT
from .engine import RecommendationEngine
from .formatter import (
    console,
    print_recommendations,
    print_trend,
    recommendations_to_json,
    trend_to_json,
)
from .insight import InsightService
from .models import CABINS, Passengers, TrackedQuery
from .providers import MockOfferSource
from .scoring import ScoringWeights

app = typer.Typer(
    name="fare-horizon",
    help="✈ Where to fly each month of the year, and for how much",
    rich_markup_mode="rich",
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

OriginArg = Annotated[str, typer.Argument(help="Origin airport code (e.g. MNL)")]
NightsOpt = Annotated[int, typer.Option("--nights", "-n", help="Trip length in nights")]
CabinOpt = Annotated[str, typer.Option("--cabin", "-c", help="ECONOMY, PREMIUM_ECONOMY, BUSINESS, FIRST")]
AdultsOpt = Annotated[int, typer.Option("--adults", help="Adults (at least 1)")]
ChildrenOpt = Annotated[int, typer.Option("--children", help="Children")]
InfantsSeatOpt = Annotated[int, typer.Option("--infants-seat", help="Infants with their own seat")]
InfantsLapOpt = Annotated[int, typer.Option("--infants-lap", help="Infants on lap")]
DiversifyOpt = Annotated[bool, typer.Option("--diversify/--no-diversify", help="Cap each country at two months")]
YearOpt = Annotated[int, typer.Option("--year", help="Planning year")]
SeedOpt = Annotated[Optional[int], typer.Option("--seed", help="Seed for the mock offer source")]
FaultOpt = Annotated[float, typer.Option("--fault-rate", help="Share of faulty long-haul mock fares")]
PriceWeightOpt = Annotated[float, typer.Option("--price-weight", help="Weight of price in the score")]
QualityWeightOpt = Annotated[float, typer.Option("--quality-weight", help="Weight of stops/duration in the score")]
JsonOpt = Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")]


def _build_query(
    origin: str,
    nights: int,
    cabin: str,
    adults: int,
    children: int,
    infants_seat: int,
    infants_lap: int,
    diversify: bool,
) -> TrackedQuery:
    """Validate CLI input into a TrackedQuery, exiting with a message on bad values."""
    cabin = cabin.upper()
    if cabin not in CABINS:
        console.print(f"[red]Invalid cabin. Choose: {', '.join(CABINS)}[/red]")
        raise typer.Exit(1)
    try:
        passengers = Passengers(adults, children, infants_seat, infants_lap)
        return TrackedQuery(
            origin=origin.upper(),
            trip_length_nights=nights,
            cabin=cabin,
            diversify=diversify,
            passengers=passengers,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _build_engine(
    year: int,
    seed: Optional[int],
    fault_rate: float,
    price_weight: float,
    quality_weight: float,
) -> RecommendationEngine:
    return RecommendationEngine(
        MockOfferSource(seed=seed, fault_rate=fault_rate),
        weights=ScoringWeights(price=price_weight, quality=quality_weight),
        year=year,
    )


@app.command()
def recommend(
    origin: OriginArg = "MNL",
    nights: NightsOpt = 5,
    cabin: CabinOpt = "ECONOMY",
    adults: AdultsOpt = 1,
    children: ChildrenOpt = 0,
    infants_seat: InfantsSeatOpt = 0,
    infants_lap: InfantsLapOpt = 0,
    diversify: DiversifyOpt = True,
    year: YearOpt = HORIZON_YEAR,
    seed: SeedOpt = None,
    fault_rate: FaultOpt = 0.1,
    price_weight: PriceWeightOpt = PRICE_WEIGHT,
    quality_weight: QualityWeightOpt = QUALITY_WEIGHT,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
):
    """
    📅 Recommend a destination country for every month of the year.

    Examples:

      fare-horizon recommend MNL --nights 7 --adults 2 --children 1

      fare-horizon recommend MNL --no-diversify --seed 42 --json
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    query = _build_query(origin, nights, cabin, adults, children, infants_seat, infants_lap, diversify)
    engine = _build_engine(year, seed, fault_rate, price_weight, quality_weight)

    if not as_json:
        console.print(f"[dim]Scanning {len(engine.countries)} countries from {query.origin} for {year}...[/dim]")
    recs = asyncio.run(engine.get_monthly_recommendations(query))

    if as_json:
        print(recommendations_to_json(recs))
    else:
        print_recommendations(recs, query.passengers)


@app.command()
def trend(
    destination: Annotated[str, typer.Argument(help="Destination airport code (e.g. NRT)")],
    origin: Annotated[str, typer.Option("--origin", "-o", help="Origin airport code")] = "MNL",
    nights: NightsOpt = 5,
    cabin: CabinOpt = "ECONOMY",
    adults: AdultsOpt = 1,
    children: ChildrenOpt = 0,
    infants_seat: InfantsSeatOpt = 0,
    infants_lap: InfantsLapOpt = 0,
    year: YearOpt = HORIZON_YEAR,
    seed: SeedOpt = None,
    fault_rate: FaultOpt = 0.1,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
):
    """
    📈 Show a 12-month price trend for one destination.

    Example:

      fare-horizon trend NRT --origin MNL --adults 2
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    query = _build_query(origin, nights, cabin, adults, children, infants_seat, infants_lap, True)
    engine = _build_engine(year, seed, fault_rate, PRICE_WEIGHT, QUALITY_WEIGHT)
    series = asyncio.run(engine.get_yearly_trend(query, destination))

    if as_json:
        print(trend_to_json(series))
    else:
        print_trend(series, destination.upper())


@app.command()
def insight(
    origin: OriginArg = "MNL",
    nights: NightsOpt = 5,
    cabin: CabinOpt = "ECONOMY",
    adults: AdultsOpt = 1,
    children: ChildrenOpt = 0,
    diversify: DiversifyOpt = True,
    year: YearOpt = HORIZON_YEAR,
    seed: SeedOpt = None,
    verbose: VerboseOpt = False,
):
    """
    💡 Monthly picks with a one-line reason to go.

    Example:

      fare-horizon insight MNL --seed 7
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    query = _build_query(origin, nights, cabin, adults, children, 0, 0, diversify)
    engine = _build_engine(year, seed, 0.1, PRICE_WEIGHT, QUALITY_WEIGHT)
    service = InsightService(year=year)

    async def run_all():
        recs = await engine.get_monthly_recommendations(query)
        texts = {}
        for rec in recs:
            texts[rec.month] = await service.get_insight(
                rec.country.name,
                MONTH_NAMES[rec.month],
                rec.recommended.price.total_php,
                rec.recommended.outbound.stops_count if rec.recommended.outbound else 0,
            )
        return recs, texts

    recs, texts = asyncio.run(run_all())
    print_recommendations(recs, query.passengers, insights=texts)


def main():
    app()


if __name__ == "__main__":
    main()
