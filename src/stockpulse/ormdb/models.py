"""SQLAlchemy ORM models for the StockPulse application."""

import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .database import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    """Registered account owning a watchlist."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    watchlist = relationship(
        "WatchlistEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WatchlistEntry.id",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


class WatchlistEntry(Base):
    """Symbol a user follows; prices are joined at read time."""

    __tablename__ = "watchlist_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "symbol", name="uq_watchlist_user_symbol"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    symbol = Column(String(32), nullable=False)
    company_name = Column(String(255), nullable=False, default="N/A")
    added_at = Column(DateTime, default=_utcnow, nullable=False)

    user = relationship("User", back_populates="watchlist")

    def __repr__(self):
        return f"<WatchlistEntry(user_id={self.user_id}, symbol='{self.symbol}')>"
