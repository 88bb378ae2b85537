from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    body: bytes


class MarketDataProvider(ABC):
    @abstractmethod
    async def fetch_quote(self, symbol: str) -> UpstreamResponse: ...

    @abstractmethod
    async def fetch_candles(self, symbol: str, start: int, end: int) -> UpstreamResponse: ...

    @abstractmethod
    async def search(self, query: str) -> UpstreamResponse: ...
