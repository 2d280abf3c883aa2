"""Data models for fare-horizon monthly flight recommendations."""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

CABINS = ("ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", "FIRST")
TRIP_TYPES = ("round_trip", "one_way")

VALID = "VALID"
QUARANTINED = "QUARANTINED"

HIGH = "HIGH"
MEDIUM = "MEDIUM"
LOW = "LOW"

MAX_PASSENGERS = 9


@dataclass(frozen=True)
class Passengers:
    """Traveller counts for a search."""
    adults: int = 1
    children: int = 0
    infants_in_seat: int = 0
    infants_on_lap: int = 0

    def __post_init__(self):
        if self.adults < 1:
            raise ValueError("At least one adult is required")
        if min(self.children, self.infants_in_seat, self.infants_on_lap) < 0:
            raise ValueError("Passenger counts cannot be negative")
        if self.total > MAX_PASSENGERS:
            raise ValueError(f"At most {MAX_PASSENGERS} passengers per search, got {self.total}")

    @property
    def total(self) -> int:
        return self.adults + self.children + self.infants_in_seat + self.infants_on_lap

    @property
    def infants(self) -> int:
        return self.infants_in_seat + self.infants_on_lap

    def multiplier(self) -> float:
        """Fare multiplier relative to a single adult fare."""
        return self.adults * 1.0 + self.children * 0.75 + self.infants * 0.1

    def summary(self) -> str:
        """Human-readable summary, e.g. '2 adults, 1 child'."""
        parts = []
        if self.adults > 0:
            parts.append(f"{self.adults} adult{'s' if self.adults > 1 else ''}")
        if self.children > 0:
            parts.append(f"{self.children} child{'ren' if self.children > 1 else ''}")
        if self.infants > 0:
            parts.append(f"{self.infants} infant{'s' if self.infants > 1 else ''}")
        return ", ".join(parts)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Passengers":
        if not isinstance(data, dict):
            raise ValueError(f"Passengers must be an object, got {type(data).__name__}")
        try:
            return cls(
                adults=int(data.get("adults", 1)),
                children=int(data.get("children", 0)),
                infants_in_seat=int(data.get("infants_in_seat", data.get("infantsInSeat", 0))),
                infants_on_lap=int(data.get("infants_on_lap", data.get("infantsOnLap", 0))),
            )
        except TypeError:
            raise ValueError(f"Passenger counts must be whole numbers: {data!r}") from None


@dataclass(frozen=True)
class FlightSegment:
    """One physical flight leg."""
    carrier_iata: str
    flight_number: str
    from_iata: str
    to_iata: str
    depart_at: str  # ISO datetime string, e.g. "2026-03-07T10:00:00"
    arrive_at: str
    duration_min: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FlightSegment":
        if not isinstance(data, dict):
            raise ValueError(f"Segment must be an object, got {type(data).__name__}")
        return cls(
            carrier_iata=str(data.get("carrier_iata", data.get("carrierIata", ""))),
            flight_number=str(data.get("flight_number", data.get("flightNumber", ""))),
            from_iata=str(data.get("from_iata", data.get("fromIata", ""))).upper(),
            to_iata=str(data.get("to_iata", data.get("toIata", ""))).upper(),
            depart_at=str(data.get("depart_at", data.get("departAt", ""))),
            arrive_at=str(data.get("arrive_at", data.get("arriveAt", ""))),
            duration_min=int(data.get("duration_min", data.get("durationMin", 0)) or 0),
        )


@dataclass(frozen=True)
class FlightSlice:
    """Ordered segments for one direction of travel."""
    direction: str  # outbound / inbound
    segments: tuple[FlightSegment, ...] = ()

    @property
    def total_duration_min(self) -> int:
        return sum(s.duration_min for s in self.segments)

    @property
    def stops_count(self) -> int:
        return max(0, len(self.segments) - 1)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FlightSlice":
        if not isinstance(data, dict):
            raise ValueError(f"Slice must be an object, got {type(data).__name__}")
        segments = data.get("segments") or []
        if not isinstance(segments, (list, tuple)):
            raise ValueError("Slice segments must be a list")
        return cls(
            direction=str(data.get("direction", "outbound")),
            segments=tuple(FlightSegment.from_dict(s) for s in segments),
        )


@dataclass(frozen=True)
class RawOffer:
    """A search result as handed over by an offer source, before normalization."""
    origin: str
    destination: str
    destination_city: str
    depart_date: str  # YYYY-MM-DD
    return_date: Optional[str]
    passengers: Passengers
    cabin: str
    base_price_usd: float
    slices: tuple[FlightSlice, ...] = ()
    is_separate_tickets: bool = False
    is_lcc: bool = False
    provider: str = "AtlasProvider"
    trip_type: str = "round_trip"

    def __post_init__(self):
        if self.cabin not in CABINS:
            raise ValueError(f"Unknown cabin {self.cabin!r}. Choose from: {', '.join(CABINS)}")
        if self.trip_type not in TRIP_TYPES:
            raise ValueError(f"Unknown trip type {self.trip_type!r}")
        if not math.isfinite(self.base_price_usd) or self.base_price_usd < 0:
            raise ValueError(f"Raw offer price must be a finite non-negative amount, got {self.base_price_usd!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawOffer":
        """Build a RawOffer from a provider payload (camelCase or snake_case keys)."""
        def pick(*keys, default=None, required=True):
            for k in keys:
                if k in data and data[k] is not None:
                    return data[k]
            if required:
                raise ValueError(f"Raw offer is missing field {keys[0]!r}")
            return default

        price = pick("base_price_usd", "basePriceUsd")
        try:
            base_price = float(price)
        except (TypeError, ValueError):
            raise ValueError(f"Raw offer price is not numeric: {price!r}") from None

        passengers = pick("passengers", default={}, required=False)
        if not isinstance(passengers, Passengers):
            passengers = Passengers.from_dict(passengers)

        raw_slices = pick("slices", default=[], required=False)
        if not isinstance(raw_slices, (list, tuple)):
            raise ValueError("Raw offer slices must be a list")
        slices = tuple(
            s if isinstance(s, FlightSlice) else FlightSlice.from_dict(s)
            for s in raw_slices
        )

        return cls(
            origin=str(pick("origin")).upper(),
            destination=str(pick("destination", "dest")).upper(),
            destination_city=str(pick("destination_city", "city", default="", required=False)),
            depart_date=str(pick("depart_date", "departDate")),
            return_date=pick("return_date", "returnDate", required=False),
            passengers=passengers,
            cabin=str(pick("cabin", default="ECONOMY", required=False)),
            base_price_usd=base_price,
            slices=slices,
            is_separate_tickets=bool(pick("is_separate_tickets", "isSeparate", default=False, required=False)),
            is_lcc=bool(pick("is_lcc", "isLcc", default=False, required=False)),
            provider=str(pick("provider", default="AtlasProvider", required=False)),
            trip_type=str(pick("trip_type", "tripType", default="round_trip", required=False)),
        )


@dataclass(frozen=True)
class OfferPrice:
    total: float       # total in `currency`
    currency: str
    total_php: int     # displayed total
    fx_rate: float
    fx_timestamp: str
    includes_taxes_and_fees: bool = True


@dataclass(frozen=True)
class OfferMeta:
    is_separate_tickets: bool = False
    is_lcc: bool = False
    baggage_unknown: bool = False


@dataclass(frozen=True)
class ValidationVerdict:
    status: str = VALID           # VALID / QUARANTINED
    reason_codes: tuple[str, ...] = ()
    confidence: str = HIGH        # HIGH / MEDIUM / LOW


@dataclass(frozen=True)
class OfferCanonical:
    """Normalized, currency-converted flight offer with its validation verdict."""
    id: str
    provider: str
    trip_type: str
    origin_iata: str
    destination_iata: str
    depart_date: str
    return_date: Optional[str]
    passengers: Passengers
    cabin: str
    price: OfferPrice
    slices: tuple[FlightSlice, ...] = ()
    meta: OfferMeta = field(default_factory=OfferMeta)
    validation: ValidationVerdict = field(default_factory=ValidationVerdict)

    @property
    def outbound(self) -> Optional[FlightSlice]:
        return self.slices[0] if self.slices else None

    @property
    def inbound(self) -> Optional[FlightSlice]:
        return self.slices[1] if len(self.slices) > 1 else None

    @property
    def outbound_carrier(self) -> Optional[str]:
        if self.outbound is None or not self.outbound.segments:
            return None
        return self.outbound.segments[0].carrier_iata

    @property
    def is_valid(self) -> bool:
        return self.validation.status == VALID


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    flag: str
    popularity_score: int = 0


@dataclass(frozen=True)
class AirportInfo:
    city: str
    iata: str


@dataclass(frozen=True)
class TrackedQuery:
    """What the user is tracking: origin, trip shape and travellers."""
    origin: str
    trip_length_nights: int = 5
    cabin: str = "ECONOMY"
    max_stops: int = 1  # carried for providers, not used when filtering
    diversify: bool = True
    passengers: Passengers = field(default_factory=Passengers)
    budget: Optional[float] = None
    id: str = "default"

    def __post_init__(self):
        if self.cabin not in CABINS:
            raise ValueError(f"Unknown cabin {self.cabin!r}. Choose from: {', '.join(CABINS)}")
        if self.trip_length_nights < 0:
            raise ValueError("Trip length cannot be negative")


@dataclass
class MonthRecommendation:
    """The winning country and its two offers for one calendar month."""
    month: int  # 0-11
    country: Country
    cheapest: OfferCanonical
    recommended: OfferCanonical
    last_refreshed: str
    is_user_verified: Optional[bool] = None
    verified_type: Optional[str] = None  # CHEAPEST / RECOMMENDED
    verified_price: Optional[float] = None
    verified_at: Optional[str] = None


@dataclass(frozen=True)
class MarketPricePoint:
    month: str       # YYYY-MM
    month_name: str  # Jan, Feb...
    cheapest: Optional[int]
    recommended: Optional[int]
    verified: Optional[float]
    confidence: str
    updated_at: str


@dataclass(frozen=True)
class VerificationReport:
    """What the user saw when re-checking an offer on an external site."""
    id: str
    month: int
    offer_id: str
    offer_type: str  # CHEAPEST / RECOMMENDED
    origin_iata: str
    destination_iata: str
    depart_date: str
    return_date: Optional[str]
    cabin: str
    passengers: Passengers
    app_price_php: int
    same_dates_confirmed: bool
    created_at: str
    price_seen_php: Optional[float] = None
    prefill_failed: bool = False
    notes: Optional[str] = None
