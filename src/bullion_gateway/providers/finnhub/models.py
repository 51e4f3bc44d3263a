"""Models for Finnhub API requests and responses."""
from pydantic import BaseModel, ConfigDict, Field


class FinnhubQuote(BaseModel):
    """GET /quote response. Finnhub answers unknown symbols with zeros, not 404."""

    model_config = ConfigDict(extra="ignore")

    current: float | None = Field(default=None, alias="c")
    change: float | None = Field(default=None, alias="d")
    percent_change: float | None = Field(default=None, alias="dp")
    high: float | None = Field(default=None, alias="h")
    low: float | None = Field(default=None, alias="l")
    open: float | None = Field(default=None, alias="o")
    previous_close: float | None = Field(default=None, alias="pc")
    timestamp: int | None = Field(default=None, alias="t")

    @property
    def is_empty(self) -> bool:
        return not self.current and not self.timestamp


class FinnhubSearchItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    symbol: str
    description: str = ""
    display_symbol: str | None = Field(default=None, alias="displaySymbol")
    type: str | None = None


class FinnhubSearchResponse(BaseModel):
    """GET /search response: {"count": n, "result": [...]}."""

    count: int = 0
    result: list[FinnhubSearchItem] = Field(default_factory=list)
