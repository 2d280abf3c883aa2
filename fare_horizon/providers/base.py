"""Base raw-offer source interface."""

from abc import ABC, abstractmethod

from ..models import RawOffer, TrackedQuery


class OfferSource(ABC):
    """Abstract base class for anything that can produce raw flight offers."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Short name of the source, used in logs."""
        ...

    @abstractmethod
    async def fetch_offers(
        self,
        query: TrackedQuery,
        month: int,
        day: int,
        destination_iata: str,
        destination_city: str,
        year: int,
    ) -> list[RawOffer]:
        """
        Fetch raw offers for one departure date and destination.

        Args:
            query: The tracked query (origin, trip length, cabin, passengers)
            month: Month index 0-11
            day: Day of month to depart on
            destination_iata: IATA airport code (e.g. "NRT")
            destination_city: City name for the airport
            year: Calendar year of the departure

        Returns:
            Possibly empty list of raw offers. Retries and timeouts are
            the source's own business.
        """
        ...
