from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stock_tracker.config import Settings, get_settings
from stock_tracker.exception_handlers import register_exception_handlers
from stock_tracker.logging_config import setup_logging
from stock_tracker.market.router import router as market_router
from stock_tracker.market.schemas import HealthStatus

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.json_logs)
    app.state.http_client = httpx.AsyncClient(timeout=settings.request_timeout)
    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        api_key=settings.masked_api_key,
    )
    yield
    await app.state.http_client.aclose()
    logger.info("server_stopped")


async def health() -> HealthStatus:
    return HealthStatus(
        status="healthy",
        time=datetime.now(UTC).replace(microsecond=0).isoformat(),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Stock Tracker",
        description="Proxy for Finnhub quotes, daily candles and symbol search",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(market_router, prefix="/api", tags=["market"])
    app.add_api_route("/api/health", health, methods=["GET"], response_model=HealthStatus)

    return app
