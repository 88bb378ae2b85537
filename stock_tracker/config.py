from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

_DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000,http://localhost:4173"


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    finnhub_api_key: str = Field(min_length=1)
    finnhub_base_url: str = Field(default="https://finnhub.io/api/v1")
    request_timeout: float = Field(default=10.0, gt=0)
    candle_window_days: int = Field(default=30, ge=1)
    mock_candles_on_failure: bool = Field(default=True)
    cors_origins: str = Field(default=_DEFAULT_CORS_ORIGINS)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def masked_api_key(self) -> str:
        return f"{self.finnhub_api_key[:8]}..."


@lru_cache
def get_settings() -> Settings:
    return Settings()
