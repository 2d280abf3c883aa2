"""Raw-offer sources."""

from .base import OfferSource
from .mock import MockOfferSource

__all__ = ["OfferSource", "MockOfferSource"]
