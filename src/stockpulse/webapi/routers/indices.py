"""Market index endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from ...core.models import IndexQuote
from ...services import MarketDataService
from ..dependencies import get_market_data_service
from ..models.responses import SuccessResponse

router = APIRouter()


@router.get(
    "",
    response_model=SuccessResponse[List[IndexQuote]],
    response_model_exclude_none=True,
    summary="List Indices",
    description="Quotes for Nifty 50, Sensex and Nifty 100",
)
async def list_indices(
    market_data: MarketDataService = Depends(get_market_data_service),
):
    indices = await market_data.get_index_quotes()
    return SuccessResponse[List[IndexQuote]](data=indices)
