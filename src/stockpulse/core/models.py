"""Market data value objects served by the API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Quote(CamelModel):
    """Point-in-time price snapshot for one symbol; every number is populated."""

    symbol: str = Field(..., description="Ticker symbol")
    company_name: str = Field(..., description="Display name")
    current_price: float = Field(0, description="Last traded price")
    previous_close: float = Field(0, description="Previous session close")
    change: float = Field(0, description="Absolute change since previous close")
    change_percent: float = Field(0, description="Percentage change")
    high: float = Field(0, description="Session high")
    low: float = Field(0, description="Session low")
    volume: int = Field(0, description="Session volume")
    market_cap: float = Field(0, description="Market capitalization")
    currency: str = Field("INR", description="Quote currency")
    open: float = Field(0, description="Session open")


class IndexQuote(Quote):
    """Quote for one of the fixed market indices."""

    index_name: str = Field(..., description="Index display name")


class HistoricalPoint(CamelModel):
    """OHLCV record for one time bucket."""

    timestamp: int = Field(..., description="Bucket start, epoch milliseconds")
    date: str = Field(..., description="Bucket start, ISO 8601")
    open: float
    high: float
    low: float
    close: float
    volume: int


class SearchResult(CamelModel):
    """Symbol search hit."""

    symbol: str
    name: str
    exchange: str


class WatchlistItem(CamelModel):
    """Stored watchlist entry joined with live prices."""

    symbol: str
    company_name: str
    added_at: str | None = None
    current_price: float = 0
    change: float = 0
    change_percent: float = 0
