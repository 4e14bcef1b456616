"""Watchlist endpoints for the authenticated user."""

from typing import List

from fastapi import APIRouter, Depends

from ...core.models import WatchlistItem
from ...ormdb.models import User
from ...services import WatchlistService
from ..dependencies import get_current_user, get_watchlist_service
from ..models.responses import BaseResponse, SuccessResponse, WatchlistEntryOut

router = APIRouter()


@router.get(
    "",
    response_model=SuccessResponse[List[WatchlistItem]],
    response_model_exclude_none=True,
    summary="Get Watchlist",
    description="Watchlist entries joined with live prices",
)
async def get_watchlist(
    user: User = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
):
    items = await watchlist.list(user)
    return SuccessResponse[List[WatchlistItem]](data=items)


@router.post(
    "/{symbol}",
    response_model=SuccessResponse[WatchlistEntryOut],
    response_model_exclude_none=True,
    summary="Add To Watchlist",
)
async def add_to_watchlist(
    symbol: str,
    user: User = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
):
    entry = await watchlist.add(user, symbol)
    return SuccessResponse[WatchlistEntryOut](
        message="Stock added to watchlist",
        data=WatchlistEntryOut(symbol=entry.symbol, company_name=entry.company_name),
    )


@router.delete(
    "/{symbol}",
    response_model=BaseResponse,
    response_model_exclude_none=True,
    summary="Remove From Watchlist",
    description="Idempotent; removing an absent symbol succeeds",
)
async def remove_from_watchlist(
    symbol: str,
    user: User = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
):
    await watchlist.remove(user, symbol)
    return BaseResponse(success=True, message="Stock removed from watchlist")
