"""Tunable constants and reference data for the recommendation pipeline."""

from .models import AirportInfo, Country

# Scoring weights (lower score = better offer)
PRICE_WEIGHT = 0.75
QUALITY_WEIGHT = 0.25
PRICE_NORMALIZER = 50_000   # PHP
DURATION_NORMALIZER = 600   # minutes
STOP_PENALTY = 5

# Fixed USD -> PHP rate, captured on every normalized offer
USD_TO_PHP = 56.45

# Destinations that no short-haul low-cost carrier serves from Manila
LONG_HAUL_AIRPORTS = frozenset({"SFO", "LAX", "JFK", "LHR", "CDG", "FCO"})
SHORT_HAUL_LCC_CARRIERS = frozenset({
    "5J",  # Cebu Pacific
    "AK",  # AirAsia
})
LONG_HAUL_PRICE_FLOOR = 15_000  # PHP

# Below this a fare is suspicious unless the destination is known to be cheap
SOFT_OUTLIER_FLOOR = 5_000  # PHP
SOFT_OUTLIER_ALLOWLIST = frozenset({"SIN", "HKG", "TPE"})

# How often one country may win a month across the 12-month horizon
DIVERSITY_CAP = 2

HORIZON_YEAR = 2026
SAMPLES_PER_MONTH = 5
TREND_SAMPLE_DAY = 15
TREND_RECOMMENDED_PREMIUM = 1.10

COUNTRIES = [
    Country("JP", "Japan", "🇯🇵", 95),
    Country("SG", "Singapore", "🇸🇬", 88),
    Country("TH", "Thailand", "🇹🇭", 92),
    Country("KR", "South Korea", "🇰🇷", 90),
    Country("TW", "Taiwan", "🇹🇼", 85),
    Country("VN", "Vietnam", "🇻🇳", 82),
    Country("ID", "Indonesia", "🇮🇩", 87),
    Country("AU", "Australia", "🇦🇺", 84),
    Country("US", "United States", "🇺🇸", 98),
    Country("GB", "United Kingdom", "🇬🇧", 94),
    Country("FR", "France", "🇫🇷", 97),
    Country("IT", "Italy", "🇮🇹", 96),
]

COUNTRY_AIRPORTS = {
    "JP": [AirportInfo("Tokyo", "NRT"), AirportInfo("Tokyo", "HND"), AirportInfo("Osaka", "KIX")],
    "SG": [AirportInfo("Singapore", "SIN")],
    "TH": [AirportInfo("Bangkok", "BKK"), AirportInfo("Phuket", "HKT")],
    "KR": [AirportInfo("Seoul", "ICN"), AirportInfo("Busan", "PUS")],
    "TW": [AirportInfo("Taipei", "TPE")],
    "VN": [AirportInfo("Hanoi", "HAN"), AirportInfo("Ho Chi Minh", "SGN")],
    "ID": [AirportInfo("Jakarta", "CGK"), AirportInfo("Bali", "DPS")],
    "AU": [AirportInfo("Sydney", "SYD"), AirportInfo("Melbourne", "MEL")],
    "US": [AirportInfo("Los Angeles", "LAX"), AirportInfo("New York", "JFK"), AirportInfo("San Francisco", "SFO")],
    "GB": [AirportInfo("London", "LHR"), AirportInfo("Manchester", "MAN")],
    "FR": [AirportInfo("Paris", "CDG"), AirportInfo("Nice", "NCE")],
    "IT": [AirportInfo("Rome", "FCO"), AirportInfo("Milan", "MXP")],
}

AIRLINES = [
    "Philippine Airlines", "Cebu Pacific", "AirAsia", "Singapore Airlines",
    "Japan Airlines", "Cathay Pacific", "EVA Air", "Korean Air", "Qantas", "Emirates",
]

AIRLINE_NAMES = {
    "PR": "Philippine Airlines",
    "5J": "Cebu Pacific",
    "AK": "AirAsia",
    "SQ": "Singapore Airlines",
    "JL": "Japan Airlines",
    "CX": "Cathay Pacific",
    "BR": "EVA Air",
    "KE": "Korean Air",
    "QF": "Qantas",
    "EK": "Emirates",
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def airline_name(carrier_iata: str) -> str:
    """Display name for a carrier code, falling back to the code itself."""
    return AIRLINE_NAMES.get(carrier_iata, carrier_iata)


def find_country(code: str) -> Country:
    for country in COUNTRIES:
        if country.code == code.upper():
            return country
    raise KeyError(f"Unknown country code: {code}")
