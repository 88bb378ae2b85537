from typing import Annotated

import httpx
from fastapi import Depends, Request

from stock_tracker.config import Settings
from stock_tracker.market.providers.base import MarketDataProvider
from stock_tracker.market.providers.finnhub import FinnhubProvider
from stock_tracker.market.service import MarketService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
HTTPClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_market_provider(client: HTTPClientDep, settings: SettingsDep) -> MarketDataProvider:
    return FinnhubProvider(
        client,
        settings.finnhub_api_key,
        settings.finnhub_base_url,
        timeout=settings.request_timeout,
    )


MarketProviderDep = Annotated[MarketDataProvider, Depends(get_market_provider)]


def get_market_service(provider: MarketProviderDep, settings: SettingsDep) -> MarketService:
    return MarketService(
        provider,
        candle_window_days=settings.candle_window_days,
        mock_candles_on_failure=settings.mock_candles_on_failure,
    )


MarketServiceDep = Annotated[MarketService, Depends(get_market_service)]
