"""
Historical candle normalization and synthetic series generation.

Requested intervals and ranges are coerced onto the supported sets, provider
candles are validated and backfilled, and a random-walk series of the same
cadence stands in whenever the provider has nothing usable.
"""

import math
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple

import pandas as pd

from .models import HistoricalPoint

DEFAULT_INTERVAL = "1d"
DEFAULT_RANGE = "1mo"

VALID_INTERVALS = ("1d", "1wk", "1mo", "3mo")

RANGE_DURATIONS = {
    "1d": timedelta(hours=24),
    "1mo": timedelta(days=30),
    "3mo": timedelta(days=90),
    "6mo": timedelta(days=180),
    "1y": timedelta(days=365),
    "5y": timedelta(days=5 * 365),
}


@dataclass(frozen=True)
class SyntheticCadence:
    """Number of steps back from now and the size of one step."""

    points: int
    unit: str


SYNTHETIC_CADENCES = {
    "1d": SyntheticCadence(24, "hours"),
    "1mo": SyntheticCadence(30, "days"),
    "3mo": SyntheticCadence(90, "days"),
    "6mo": SyntheticCadence(180, "days"),
    "1y": SyntheticCadence(52, "weeks"),
    "5y": SyntheticCadence(60, "months"),
}

MIN_SYNTHETIC_PRICE = 10.0


def resolve_interval(interval: Optional[str]) -> str:
    """Coerce an unrecognized interval to the daily default."""
    return interval if interval in VALID_INTERVALS else DEFAULT_INTERVAL


def resolve_range(range_: Optional[str]) -> str:
    """Coerce an unrecognized range to the one-month default."""
    return range_ if range_ in RANGE_DURATIONS else DEFAULT_RANGE


def range_window(
    range_: str, now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """
    Compute the ``(period1, period2)`` request window for a resolved range.

    Args:
        range_: One of the keys of ``RANGE_DURATIONS``
        now: Reference time (defaults to the current UTC time)

    Returns:
        Tuple of window start and end
    """
    period2 = now or datetime.now(timezone.utc)
    period1 = period2 - RANGE_DURATIONS[range_]
    return period1, period2


def _point_time(moment: datetime) -> Tuple[int, str]:
    """Epoch milliseconds and ISO string (UTC, ``Z`` suffix) for a moment."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    iso = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return int(moment.timestamp() * 1000), iso


def _present(value: Any) -> bool:
    if value is None:
        return False
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False


def _price(value: Any, fallback: float) -> float:
    # Zero and missing values fall back to the close
    return float(value) if _present(value) and float(value) else fallback


def candles_to_points(frame: Optional[pd.DataFrame]) -> List[HistoricalPoint]:
    """
    Map a provider OHLCV frame onto HistoricalPoints.

    Rows without a timestamp or a close price are discarded; missing open,
    high and low are backfilled from the close and missing volume becomes 0.
    The result is sorted oldest first.
    """
    if frame is None or frame.empty or "Close" not in frame.columns:
        return []

    points = []
    for ts, row in frame.sort_index().iterrows():
        if ts is None or pd.isna(ts):
            continue
        close = row.get("Close")
        if not _present(close):
            continue

        close = float(close)
        volume = row.get("Volume")
        timestamp, iso = _point_time(pd.Timestamp(ts).to_pydatetime())
        points.append(
            HistoricalPoint(
                timestamp=timestamp,
                date=iso,
                open=_price(row.get("Open"), close),
                high=_price(row.get("High"), close),
                low=_price(row.get("Low"), close),
                close=close,
                volume=int(volume) if _present(volume) else 0,
            )
        )
    return points


def _step_back(now: datetime, unit: str, steps: int) -> datetime:
    return (pd.Timestamp(now) - pd.DateOffset(**{unit: steps})).to_pydatetime()


def synthesize(
    range_: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[HistoricalPoint]:
    """
    Generate a plausible random-walk series for a range.

    The series has one point per cadence step from ``now - N`` up to ``now``
    inclusive (N + 1 points) and closes never drop below 10.

    Args:
        range_: Range key; unknown ranges use the one-month cadence
        now: Reference time (defaults to the current UTC time)
        rng: Random source, injectable for tests

    Returns:
        Chronologically ascending list of synthetic points
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    cadence = SYNTHETIC_CADENCES.get(range_, SYNTHETIC_CADENCES[DEFAULT_RANGE])

    current_price = 1500 + rng.random() * 1000
    points = []

    for i in range(cadence.points, -1, -1):
        moment = _step_back(now, cadence.unit, i)

        current_price = max(
            MIN_SYNTHETIC_PRICE, current_price + rng.uniform(-10, 10)
        )
        close = current_price
        open_ = close + rng.uniform(-5, 5)
        high = max(open_, close) + rng.uniform(0, 15)
        low = max(0.0, min(open_, close) - rng.uniform(0, 15))

        timestamp, iso = _point_time(moment)
        points.append(
            HistoricalPoint(
                timestamp=timestamp,
                date=iso,
                open=round(open_, 2),
                high=round(high, 2),
                low=round(low, 2),
                close=round(close, 2),
                volume=int(1_000_000 + rng.random() * 5_000_000),
            )
        )

    return points
