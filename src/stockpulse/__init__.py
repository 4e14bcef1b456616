"""StockPulse - stock tracking backend with accounts and watchlists."""

__version__ = "1.0.0"
