"""measure-agi: derived metrics for the 100-day AGI campaign dashboard."""

__version__ = "0.1.0"
