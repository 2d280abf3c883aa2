"""fare-horizon: monthly destination and fare recommendations."""

__version__ = "0.1.0"
