"""Watchlist service: per-user symbol list joined with live prices."""

import asyncio
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config.logging import get_logger, log_audit_event
from ..core.models import WatchlistItem
from ..core.symbols import normalize_symbol
from ..exceptions import ConflictError, NotFoundError
from ..ormdb.models import User, WatchlistEntry
from ..ormdb.repositories import WatchlistRepository
from .market_data import MarketDataService

logger = get_logger(__name__)

ALREADY_IN_WATCHLIST = "Stock already in watchlist"


class WatchlistService:
    """Service for one user's watchlist."""

    def __init__(self, session: Session, market_data: MarketDataService):
        self.entries = WatchlistRepository(session)
        self.market_data = market_data
        self.logger = logger.bind(service="watchlist_service")

    async def _join(self, entry: WatchlistEntry) -> WatchlistItem:
        quote = await self.market_data.get_quote(entry.symbol)
        return WatchlistItem(
            symbol=entry.symbol,
            company_name=entry.company_name,
            added_at=entry.added_at.isoformat() if entry.added_at else None,
            current_price=quote.current_price if quote else 0,
            change=quote.change if quote else 0,
            change_percent=quote.change_percent if quote else 0,
        )

    async def list(self, user: User) -> List[WatchlistItem]:
        """
        Get the watchlist with fresh prices.

        Entries whose quote cannot be fetched are kept with zeroed prices.
        """
        entries = self.entries.list_entries(user.id)
        return list(await asyncio.gather(*(self._join(entry) for entry in entries)))

    async def add(self, user: User, symbol: str) -> WatchlistEntry:
        """
        Append a symbol using the company name from its quote.

        Raises:
            NotFoundError: If the symbol has no resolvable quote
            ConflictError: If the symbol is already in the watchlist
        """
        symbol = normalize_symbol(symbol)
        quote = await self.market_data.get_quote(symbol)
        if quote is None:
            raise NotFoundError("Stock not found", "stock", symbol)

        if self.entries.find_entry(user.id, symbol):
            raise ConflictError(ALREADY_IN_WATCHLIST)

        try:
            entry = self.entries.add_entry(user.id, symbol, quote.company_name)
        except IntegrityError as e:
            # Concurrent add of the same symbol
            self.entries.session.rollback()
            raise ConflictError(ALREADY_IN_WATCHLIST) from e

        log_audit_event("watchlist_added", user_id=str(user.id), symbol=symbol)
        return entry

    async def remove(self, user: User, symbol: str) -> None:
        """Remove a symbol; removing an absent symbol is a no-op."""
        symbol = normalize_symbol(symbol)
        removed = self.entries.remove_entry(user.id, symbol)
        log_audit_event(
            "watchlist_removed", user_id=str(user.id), symbol=symbol, existed=removed
        )
