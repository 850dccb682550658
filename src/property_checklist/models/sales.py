"""Sale history and price-discrepancy models."""

from pydantic import BaseModel, ConfigDict, Field

from property_checklist.models.core import DataStatus, PriceDiscrepancyReason


class SaleHistoryEntry(BaseModel):
    """One row of a property's sale history, as scraped (strings, not parsed)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    year: str
    sold_price: str = Field(validation_alias="soldPrice")
    percentage_change: str = Field(default="0%", validation_alias="percentageChange")


class PriceDiscrepancyResult(BaseModel):
    """How the asking price compares with the last recorded sale."""

    model_config = ConfigDict(frozen=True)

    value: str
    status: DataStatus
    reason: PriceDiscrepancyReason


class SalesInsights(BaseModel):
    """Price discrepancy, CAGR and volatility for one listing."""

    model_config = ConfigDict(frozen=True)

    price_discrepancy: PriceDiscrepancyResult
    cagr: float | None = None
    volatility: str = "N/A"
    most_recent_sale: SaleHistoryEntry | None = None

    @property
    def value(self) -> str:
        return self.price_discrepancy.value

    @property
    def status(self) -> DataStatus:
        return self.price_discrepancy.status

    @property
    def reason(self) -> PriceDiscrepancyReason:
        return self.price_discrepancy.reason
