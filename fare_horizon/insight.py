"""Short destination blurbs from an external text service.

The text service is any async callable taking a prompt string. Failures
never reach the caller: they are logged and replaced by a fixed sentence.
"""

import logging
from typing import Awaitable, Callable, Optional

from .config import HORIZON_YEAR

logger = logging.getLogger(__name__)

ERROR_FALLBACK = "Great value for this destination during this time of year."
EMPTY_FALLBACK = "A perfect balance of cost and experience for this season."

TextGenerator = Callable[[str], Awaitable[str]]


def build_insight_prompt(country_name: str, month_name: str, price: float, stops: int, year: int = HORIZON_YEAR) -> str:
    return (
        f"Explain briefly (2 sentences max) why {country_name} is a great choice in "
        f"{month_name} {year}, considering the price is PHP {price:,.0f} with {stops} stops. "
        f"Focus on weather or events."
    )


def template_insight(country_name: str, month_name: str, price: float, stops: int) -> str:
    """Offline blurb used when no text service is configured."""
    routing = "a nonstop routing" if stops == 0 else f"{stops} stop{'s' if stops != 1 else ''}"
    return (
        f"{country_name} in {month_name} pairs a fare of PHP {price:,.0f} with {routing}, "
        f"one of the better value windows in the year."
    )


class InsightService:
    """Wraps a text generator with the fallback behaviour the UI relies on."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        fallback: str = ERROR_FALLBACK,
        year: int = HORIZON_YEAR,
    ):
        self.generator = generator
        self.fallback = fallback
        self.year = year

    async def get_insight(self, country_name: str, month_name: str, price: float, stops: int) -> str:
        if self.generator is None:
            return template_insight(country_name, month_name, price, stops)

        prompt = build_insight_prompt(country_name, month_name, price, stops, self.year)
        try:
            text = await self.generator(prompt)
        except Exception as e:
            logger.warning(f"Insight service error for {country_name}/{month_name}: {e}")
            return self.fallback

        text = (text or "").strip()
        return text or EMPTY_FALLBACK
