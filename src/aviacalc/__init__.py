"""AviaCalc - flight log fuel balance calculator."""

__version__ = "1.0.0"
