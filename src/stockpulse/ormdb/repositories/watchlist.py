"""Repository for watchlist entry operations."""

from typing import List, Optional

from ..models import WatchlistEntry
from .base import BaseRepository


class WatchlistRepository(BaseRepository):
    """Repository for a user's watchlist entries."""

    def list_entries(self, user_id: int) -> List[WatchlistEntry]:
        """Get a user's entries in insertion order."""
        return (
            self.session.query(WatchlistEntry)
            .filter(WatchlistEntry.user_id == user_id)
            .order_by(WatchlistEntry.id)
            .all()
        )

    def find_entry(self, user_id: int, symbol: str) -> Optional[WatchlistEntry]:
        """Get the entry for a symbol, if present."""
        return (
            self.session.query(WatchlistEntry)
            .filter(
                WatchlistEntry.user_id == user_id, WatchlistEntry.symbol == symbol
            )
            .first()
        )

    def add_entry(self, user_id: int, symbol: str, company_name: str) -> WatchlistEntry:
        """Append an entry to the watchlist."""
        entry = WatchlistEntry(user_id=user_id, symbol=symbol, company_name=company_name)
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def remove_entry(self, user_id: int, symbol: str) -> bool:
        """Delete the entry for a symbol; returns whether one existed."""
        deleted = (
            self.session.query(WatchlistEntry)
            .filter(
                WatchlistEntry.user_id == user_id, WatchlistEntry.symbol == symbol
            )
            .delete(synchronize_session="fetch")
        )
        self.session.commit()
        return deleted > 0
