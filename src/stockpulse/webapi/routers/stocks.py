"""Stock quote, history and search endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...core.models import HistoricalPoint, Quote, SearchResult
from ...exceptions import NotFoundError
from ...services import MarketDataService
from ..dependencies import get_market_data_service
from ..models.responses import SuccessResponse

router = APIRouter()


@router.get(
    "",
    response_model=SuccessResponse[List[Quote]],
    response_model_exclude_none=True,
    summary="List Stocks",
    description="Quotes for the fixed overview list; unavailable symbols are omitted",
)
async def list_stocks(
    market_data: MarketDataService = Depends(get_market_data_service),
):
    quotes = await market_data.get_stock_quotes()
    return SuccessResponse[List[Quote]](data=quotes)


@router.get(
    "/search/{query}",
    response_model=SuccessResponse[List[SearchResult]],
    response_model_exclude_none=True,
    summary="Search Stocks",
    description="Free-text symbol search restricted to NSE/BSE listings",
)
async def search_stocks(
    query: str,
    market_data: MarketDataService = Depends(get_market_data_service),
):
    results = await market_data.search(query)
    return SuccessResponse[List[SearchResult]](data=results)


@router.get(
    "/{symbol}",
    response_model=SuccessResponse[Quote],
    response_model_exclude_none=True,
    summary="Get Stock Quote",
    description="Current quote for a single symbol",
)
async def get_stock(
    symbol: str,
    market_data: MarketDataService = Depends(get_market_data_service),
):
    """
    Get current stock quote.

    - **symbol**: Ticker symbol (e.g., RELIANCE.NS, ^NSEI)

    Returns 404 when the provider cannot resolve the symbol.
    """
    quote = await market_data.get_quote(symbol)
    if quote is None:
        raise NotFoundError("Stock not found", "stock", symbol)
    return SuccessResponse[Quote](data=quote)


@router.get(
    "/{symbol}/historical",
    response_model=SuccessResponse[List[HistoricalPoint]],
    response_model_exclude_none=True,
    summary="Get Historical Data",
    description="OHLCV series for charting; never empty",
)
async def get_historical(
    symbol: str,
    interval: Optional[str] = Query("1d", description="1d, 1wk, 1mo or 3mo"),
    range_: Optional[str] = Query(
        "1mo", alias="range", description="1d, 1mo, 3mo, 6mo, 1y or 5y"
    ),
    market_data: MarketDataService = Depends(get_market_data_service),
):
    """
    Get historical candles.

    - **interval**: Candle size; unknown values fall back to 1d
    - **range**: Look-back window; unknown values fall back to 1mo

    When real candles are unavailable the series is synthetic.
    """
    points = await market_data.get_history(symbol, interval, range_)
    return SuccessResponse[List[HistoricalPoint]](data=points)
