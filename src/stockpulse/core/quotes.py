"""Mapping of raw provider quote payloads to the canonical Quote."""

import math
from typing import Any, Dict, Optional

from .models import Quote
from .symbols import INDIAN_STOCKS


def _number(payload: Dict[str, Any], *keys: str) -> float:
    """First present, finite, non-zero value among keys, else 0."""
    for key in keys:
        value = payload.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number) and number:
            return number
    return 0.0


def resolve_company_name(symbol: str, payload: Dict[str, Any]) -> str:
    """Static table, then long name, then short name, then 'N/A'."""
    return (
        INDIAN_STOCKS.get(symbol)
        or payload.get("longName")
        or payload.get("shortName")
        or "N/A"
    )


def normalize_quote(
    symbol: str, payload: Dict[str, Any], default_currency: str = "INR"
) -> Quote:
    """
    Build a fully populated Quote from a provider payload.

    Args:
        symbol: Requested symbol, used for the company name lookup
        payload: Raw quote dictionary carrying at least a ``symbol`` key
        default_currency: Currency used when the provider omits one

    Returns:
        Quote with every numeric field set (0 when the provider omits it)
    """
    return Quote(
        symbol=payload["symbol"],
        company_name=resolve_company_name(symbol, payload),
        current_price=_number(payload, "regularMarketPrice", "currentPrice"),
        previous_close=_number(payload, "regularMarketPreviousClose", "previousClose"),
        change=_number(payload, "regularMarketChange"),
        change_percent=_number(payload, "regularMarketChangePercent"),
        high=_number(payload, "regularMarketDayHigh", "dayHigh"),
        low=_number(payload, "regularMarketDayLow", "dayLow"),
        volume=int(_number(payload, "regularMarketVolume", "volume")),
        market_cap=_number(payload, "marketCap"),
        currency=payload.get("currency") or default_currency,
        open=_number(payload, "regularMarketOpen", "open"),
    )


def has_symbol(payload: Optional[Dict[str, Any]]) -> bool:
    """A usable quote payload must name its symbol."""
    return bool(payload) and bool(payload.get("symbol"))
