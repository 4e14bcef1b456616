"""Market data service: quotes, indices, history and search."""

import asyncio
from typing import List, Optional

from ..config.logging import get_logger
from ..core.history import (
    candles_to_points,
    range_window,
    resolve_interval,
    resolve_range,
    synthesize,
)
from ..core.models import HistoricalPoint, IndexQuote, Quote, SearchResult
from ..core.provider import YahooFinanceProvider
from ..core.quotes import normalize_quote
from ..core.search import filter_search_results
from ..core.symbols import INDIAN_INDICES, INDIAN_STOCKS, normalize_symbol
from ..exceptions import ProviderError

logger = get_logger(__name__)


class MarketDataService:
    """
    Read-side market data operations.

    Provider failures are logged with their reason and then absorbed: a
    quote becomes ``None``, a search becomes empty and a history becomes a
    synthetic series. None of these methods raise on provider trouble.
    """

    def __init__(
        self,
        provider: Optional[YahooFinanceProvider] = None,
        default_currency: str = "INR",
    ):
        self.provider = provider or YahooFinanceProvider()
        self.default_currency = default_currency
        self.logger = logger.bind(service="market_data_service")

    def _log_provider_failure(self, error: ProviderError) -> None:
        self.logger.warning(
            "Provider call failed",
            symbol=error.symbol,
            operation=error.operation,
            reason=error.reason,
            error=error.message,
        )

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        """
        Get the canonical quote for a symbol.

        Args:
            symbol: Ticker symbol, not validated locally

        Returns:
            Quote, or None when the symbol cannot be resolved
        """
        symbol = normalize_symbol(symbol)
        try:
            payload = await self.provider.fetch_quote(symbol)
            return normalize_quote(symbol, payload, self.default_currency)
        except ProviderError as e:
            self._log_provider_failure(e)
            return None
        except Exception as e:
            self.logger.error(
                "Unexpected quote payload",
                symbol=symbol,
                reason="upstream_unavailable",
                error=str(e),
                exc_info=True,
            )
            return None

    async def get_quotes(self, symbols: List[str]) -> List[Quote]:
        """
        Get quotes for several symbols concurrently.

        Symbols that fail are left out; the call itself never fails.
        """
        if not symbols:
            return []

        results = await asyncio.gather(
            *(self.get_quote(symbol) for symbol in symbols), return_exceptions=True
        )
        quotes = [quote for quote in results if isinstance(quote, Quote)]

        if len(quotes) < len(symbols):
            self.logger.info(
                "Some quotes could not be fetched",
                successful_count=len(quotes),
                total_count=len(symbols),
            )
        return quotes

    async def get_stock_quotes(self) -> List[Quote]:
        """Quotes for the fixed stock overview list."""
        return await self.get_quotes(list(INDIAN_STOCKS))

    async def get_index_quotes(self) -> List[IndexQuote]:
        """Quotes for the fixed index set, tagged with display names."""
        quotes = await self.get_quotes(list(INDIAN_INDICES))
        return [
            IndexQuote(
                **quote.model_dump(),
                index_name=INDIAN_INDICES.get(quote.symbol, "N/A"),
            )
            for quote in quotes
        ]

    async def get_history(
        self, symbol: str, interval: Optional[str] = None, range_: Optional[str] = None
    ) -> List[HistoricalPoint]:
        """
        Get a chronologically ascending OHLCV series.

        Unrecognized interval or range values fall back to ``1d``/``1mo``.
        When the provider fails or has no valid candles the series is
        synthetic. The result is never empty.
        """
        symbol = normalize_symbol(symbol)
        safe_interval = resolve_interval(interval)
        safe_range = resolve_range(range_)
        period1, period2 = range_window(safe_range)

        self.logger.info(
            "Fetching historical data",
            symbol=symbol,
            interval=safe_interval,
            range=safe_range,
            period1=period1.isoformat(),
            period2=period2.isoformat(),
        )

        try:
            frame = await self.provider.fetch_candles(
                symbol, safe_interval, period1, period2
            )
            points = candles_to_points(frame)
        except ProviderError as e:
            self._log_provider_failure(e)
            points = []
        except Exception as e:
            self.logger.error(
                "Unexpected candle payload",
                symbol=symbol,
                reason="upstream_unavailable",
                error=str(e),
                exc_info=True,
            )
            points = []

        if points:
            return points

        points = synthesize(safe_range)
        self.logger.warning(
            "No valid candles, serving synthetic series",
            symbol=symbol,
            range=safe_range,
            points=len(points),
        )
        return points

    async def search(self, query: str) -> List[SearchResult]:
        """Search symbols, keeping recognized Indian exchanges only."""
        try:
            hits = await self.provider.search(query)
            return filter_search_results(hits)
        except ProviderError as e:
            self._log_provider_failure(e)
            return []
        except Exception as e:
            self.logger.error(
                "Unexpected search payload",
                query=query,
                reason="upstream_unavailable",
                error=str(e),
                exc_info=True,
            )
            return []
