"""HTTP API for StockPulse."""
