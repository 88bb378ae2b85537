from fastapi import APIRouter, Response

from stock_tracker.dependencies import MarketServiceDep
from stock_tracker.market.schemas import APIErrorResponse, CandleSet, Quote

router = APIRouter()

_ERROR_RESPONSES = {
    code: {"model": APIErrorResponse} for code in (401, 403, 429, 500, 502)
}


@router.get("/quote/{symbol}", response_model=Quote, responses=_ERROR_RESPONSES)
async def get_quote(symbol: str, service: MarketServiceDep) -> Quote:
    return await service.get_quote(symbol)


@router.get("/candles/{symbol}", response_model=CandleSet, responses=_ERROR_RESPONSES)
async def get_candles(symbol: str, service: MarketServiceDep) -> Response:
    body = await service.get_candles(symbol)
    return Response(content=body, media_type="application/json")


@router.get("/search/{query}", responses=_ERROR_RESPONSES)
async def search_symbols(query: str, service: MarketServiceDep) -> Response:
    body = await service.search(query)
    return Response(content=body, media_type="application/json")
