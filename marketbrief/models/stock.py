"""Stock summary model."""

from pydantic import BaseModel, Field


class StockSummary(BaseModel):
    """Daily trading summary for one listed stock."""

    ticker: str = Field("", description="Ticker symbol from the page heading")
    range: str = Field("", description="Today's trading range as shown on the page")
    volume: int = Field(0, description="Volume traded", ge=0)
