from pydantic import BaseModel, ConfigDict, Field, field_validator


class Quote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str = ""
    current_price: float = Field(default=0.0, alias="c", strict=True)
    change: float = Field(default=0.0, alias="d", strict=True)
    percent_change: float = Field(default=0.0, alias="dp", strict=True)
    high_price: float = Field(default=0.0, alias="h", strict=True)
    low_price: float = Field(default=0.0, alias="l", strict=True)
    open_price: float = Field(default=0.0, alias="o", strict=True)
    previous_close: float = Field(default=0.0, alias="pc", strict=True)

    @field_validator(
        "current_price",
        "change",
        "percent_change",
        "high_price",
        "low_price",
        "open_price",
        "previous_close",
        mode="before",
    )
    @classmethod
    def _null_as_zero(cls, value: object) -> object:
        # Finnhub sends null for unknown symbols on some fields
        return 0.0 if value is None else value


class CandleSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    close: list[float] = Field(alias="c")
    high: list[float] = Field(alias="h")
    low: list[float] = Field(alias="l")
    open: list[float] = Field(alias="o")
    status: str = Field(alias="s")
    timestamp: list[int] = Field(alias="t")
    volume: list[int] = Field(alias="v")


class APIErrorResponse(BaseModel):
    error: str
    message: str
    code: int


class HealthStatus(BaseModel):
    status: str
    time: str
