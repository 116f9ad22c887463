"""cadence — natural-language recurrence rules and next-occurrence search."""

__version__ = "0.1.0"
