"""Repository classes for database operations using SQLAlchemy ORM."""

from .base import BaseRepository
from .user import UserRepository
from .watchlist import WatchlistRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "WatchlistRepository",
]
