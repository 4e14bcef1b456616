"""Core market data mapping, synthetic series and security primitives."""
