"""Trading Tracker: trading-discipline journal with scoring and trend reports."""

__version__ = "0.1.0"
