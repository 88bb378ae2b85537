import httpx
import pytest
from fastapi.testclient import TestClient

from stock_tracker.config import Settings
from stock_tracker.dependencies import get_http_client
from stock_tracker.main import create_app
from tests.helpers import API_KEY, Handler


@pytest.fixture
def settings() -> Settings:
    return Settings(finnhub_api_key=API_KEY, _env_file=None)


@pytest.fixture
def make_client(settings):
    """Build a TestClient whose upstream calls are answered by ``handler``."""

    def _make(handler: Handler, app_settings: Settings | None = None) -> TestClient:
        app = create_app(app_settings or settings)
        upstream = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_http_client] = lambda: upstream
        return TestClient(app)

    return _make
