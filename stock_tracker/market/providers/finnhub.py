import asyncio

import httpx
import structlog

from stock_tracker.exceptions import UpstreamReadError, UpstreamUnavailableError
from stock_tracker.market.providers.base import MarketDataProvider, UpstreamResponse

logger = structlog.get_logger()

FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
DAILY_RESOLUTION = "D"
DEFAULT_TIMEOUT = 10.0


class FinnhubProvider(MarketDataProvider):
    """Issues one GET per call against the Finnhub REST API.

    The response body is read in full and handed back with its status code;
    interpreting the status is left to the caller. The whole exchange, body
    included, must finish within ``timeout`` seconds. Transport failures,
    deadline overruns and body read failures are raised as ``AppError``
    subclasses.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = FINNHUB_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def fetch_quote(self, symbol: str) -> UpstreamResponse:
        return await self._get("quote", {"symbol": symbol}, symbol=symbol)

    async def fetch_candles(self, symbol: str, start: int, end: int) -> UpstreamResponse:
        params = {
            "symbol": symbol,
            "resolution": DAILY_RESOLUTION,
            "from": start,
            "to": end,
        }
        return await self._get("stock/candle", params, symbol=symbol)

    async def search(self, query: str) -> UpstreamResponse:
        return await self._get("search", {"q": query}, query=query)

    async def _get(self, path: str, params: dict, **context: str) -> UpstreamResponse:
        url = f"{self._base_url}/{path}"
        params = {**params, "token": self._api_key}

        try:
            async with asyncio.timeout(self._timeout):
                async with self._client.stream("GET", url, params=params) as response:
                    try:
                        body = await response.aread()
                    except httpx.HTTPError as exc:
                        logger.error("finnhub_read_error", path=path, error=str(exc), **context)
                        raise UpstreamReadError() from exc
        except TimeoutError as exc:
            logger.error("finnhub_deadline_exceeded", path=path, timeout=self._timeout, **context)
            raise UpstreamUnavailableError() from exc
        except httpx.HTTPError as exc:
            logger.error("finnhub_request_error", path=path, error=str(exc), **context)
            raise UpstreamUnavailableError() from exc

        return UpstreamResponse(status_code=response.status_code, body=body)
