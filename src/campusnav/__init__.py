"""Campus route finding and capacity allocation engine."""

__version__ = "1.0.0"
