"""aerocheck: rule-based compliance linter for aviation log documents."""

__version__ = "0.1.0"
