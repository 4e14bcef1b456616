"""Yahoo Finance market data provider."""

import asyncio
from datetime import datetime
from typing import Any, Dict, List

import pandas as pd
import yfinance as yf

from ..exceptions import SymbolNotFoundError, UpstreamUnavailableError
from .quotes import has_symbol


class YahooFinanceProvider:
    """
    Async facade over yfinance.

    yfinance is blocking, so every call runs in a worker thread and several
    lookups can be awaited concurrently. Failures are reported as
    ``SymbolNotFoundError`` when the provider has no such symbol and
    ``UpstreamUnavailableError`` for everything else. Nothing is retried.
    """

    def __init__(self, search_max_results: int = 10) -> None:
        self._search_max_results = search_max_results

    def _fetch_quote_sync(self, symbol: str) -> Dict[str, Any]:
        try:
            info = yf.Ticker(symbol).info
        except Exception as e:
            raise UpstreamUnavailableError(symbol, "quote", str(e)) from e

        if not isinstance(info, dict):
            raise UpstreamUnavailableError(symbol, "quote", "malformed payload")
        if not has_symbol(info):
            raise SymbolNotFoundError(symbol, "quote")
        return info

    async def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        """Fetch the raw quote payload for a symbol."""
        return await asyncio.to_thread(self._fetch_quote_sync, symbol)

    def _fetch_candles_sync(
        self, symbol: str, interval: str, start: datetime, end: datetime
    ) -> pd.DataFrame:
        try:
            frame = yf.Ticker(symbol).history(
                start=start, end=end, interval=interval, raise_errors=True
            )
        except Exception as e:
            raise UpstreamUnavailableError(symbol, "history", str(e)) from e

        if not isinstance(frame, pd.DataFrame):
            raise UpstreamUnavailableError(symbol, "history", "malformed payload")
        return frame

    async def fetch_candles(
        self, symbol: str, interval: str, start: datetime, end: datetime
    ) -> pd.DataFrame:
        """Fetch OHLCV candles for ``[start, end]`` at the given interval."""
        return await asyncio.to_thread(
            self._fetch_candles_sync, symbol, interval, start, end
        )

    def _search_sync(self, query: str) -> List[Dict[str, Any]]:
        try:
            hits = yf.Search(
                query, max_results=self._search_max_results, news_count=0
            ).quotes
        except Exception as e:
            raise UpstreamUnavailableError(query, "search", str(e)) from e

        if not isinstance(hits, list):
            raise UpstreamUnavailableError(query, "search", "malformed payload")
        return hits

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Run a free-text symbol search."""
        return await asyncio.to_thread(self._search_sync, query)
