"""Filtering of provider search hits to recognized Indian markets."""

from typing import Any, Dict, Iterable, List

from .models import SearchResult
from .symbols import DEFAULT_EXCHANGE, is_recognized_market


def filter_search_results(hits: Iterable[Dict[str, Any]]) -> List[SearchResult]:
    """
    Keep only hits listed on a recognized exchange.

    Args:
        hits: Raw provider search quotes

    Returns:
        SearchResult list in provider order
    """
    results = []
    for hit in hits or []:
        if not hit or not hit.get("symbol"):
            continue
        symbol = hit["symbol"]
        exchange = hit.get("exchange")
        if not is_recognized_market(symbol, exchange):
            continue
        results.append(
            SearchResult(
                symbol=symbol,
                name=hit.get("longname") or hit.get("shortname") or "N/A",
                exchange=exchange or DEFAULT_EXCHANGE,
            )
        )
    return results
