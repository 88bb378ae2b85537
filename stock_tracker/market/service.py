from datetime import UTC, datetime, timedelta

import structlog
from pydantic import ValidationError

from stock_tracker.exceptions import UpstreamParseError
from stock_tracker.market.providers.base import MarketDataProvider
from stock_tracker.market.schemas import CandleSet, Quote
from stock_tracker.market.translator import ErrorPolicy, UpstreamOutcome, check_upstream_response

logger = structlog.get_logger()

_SECONDS_PER_DAY = 24 * 60 * 60

QUOTE_POLICY = ErrorPolicy(
    operation="quote",
    forbidden_message="API access forbidden - check your plan limits",
)
SEARCH_POLICY = ErrorPolicy(operation="search", forbidden_message="API access forbidden")


def mock_candle_set(now: int) -> CandleSet:
    """Fixed five-day series used when historical data is unavailable."""
    return CandleSet(
        close=[150.0, 152.0, 148.0, 155.0, 153.0],
        high=[155.0, 156.0, 152.0, 158.0, 157.0],
        low=[148.0, 150.0, 145.0, 152.0, 150.0],
        open=[149.0, 151.0, 149.0, 154.0, 154.0],
        status="ok",
        timestamp=[now - days_ago * _SECONDS_PER_DAY for days_ago in range(4, -1, -1)],
        volume=[1000000, 1200000, 800000, 1500000, 1100000],
    )


def _unix_now() -> int:
    return int(datetime.now(UTC).timestamp())


class MarketService:
    def __init__(
        self,
        provider: MarketDataProvider,
        candle_window_days: int = 30,
        mock_candles_on_failure: bool = True,
    ) -> None:
        self._provider = provider
        self._candle_window = timedelta(days=candle_window_days)
        self._candle_policy = ErrorPolicy(
            operation="candles",
            forbidden_message=QUOTE_POLICY.forbidden_message,
            mask_failures=mock_candles_on_failure,
        )

    async def get_quote(self, symbol: str) -> Quote:
        symbol = symbol.upper()
        logger.info("market_get_quote", symbol=symbol)

        response = await self._provider.fetch_quote(symbol)
        check_upstream_response(response, QUOTE_POLICY, symbol=symbol)

        try:
            quote = Quote.model_validate_json(response.body)
        except ValidationError as exc:
            logger.error("market_quote_parse_error", symbol=symbol, error=str(exc))
            raise UpstreamParseError() from exc

        return quote.model_copy(update={"symbol": symbol})

    async def get_candles(self, symbol: str) -> bytes:
        """Return the upstream candle JSON, or the mock series when masked."""
        symbol = symbol.upper()
        end = _unix_now()
        start = end - int(self._candle_window.total_seconds())
        logger.info("market_get_candles", symbol=symbol, start=start, end=end)

        response = await self._provider.fetch_candles(symbol, start, end)
        outcome = check_upstream_response(response, self._candle_policy, symbol=symbol)
        if outcome is UpstreamOutcome.OK:
            return response.body

        logger.warning("market_candles_mocked", symbol=symbol, outcome=str(outcome))
        return mock_candle_set(end).model_dump_json(by_alias=True).encode()

    async def search(self, query: str) -> bytes:
        logger.info("market_search", query=query)

        response = await self._provider.search(query)
        check_upstream_response(response, SEARCH_POLICY, query=query)
        return response.body
