"""Request DTOs for API endpoints.

Pydantic v2 models for request validation. Form values arrive loosely
typed; the item form coerces them into a typed ItemData before anything
reaches the ledger.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from stockledger.core.entities.inventory import ItemData


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ItemFormRequest(BaseModel):
    """Item create / edit form."""

    name: str = Field(..., min_length=1, max_length=100, description="Item name")
    description: str = Field(default="", max_length=500, description="Free-text description")
    quantity: int = Field(default=0, ge=0, description="Quantity on hand")
    price: float | None = Field(default=None, ge=0, description="Unit price")
    category: str | None = Field(default=None, max_length=50, description="Category")
    low_stock_threshold: int | None = Field(
        default=None,
        ge=0,
        description="Warn when quantity drops below this value",
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("quantity", mode="before")
    @classmethod
    def blank_quantity_is_zero(cls, v: Any) -> Any:
        return 0 if _blank_to_none(v) is None else v

    @field_validator("price", "category", "low_stock_threshold", mode="before")
    @classmethod
    def blank_optional_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def to_item_data(self) -> ItemData:
        return ItemData(**self.model_dump())


class StockMovementRequest(BaseModel):
    """Stock input / output form."""

    quantity: int = Field(..., description="Units moved, must be greater than zero")
    reason: str = Field(default="", max_length=200, description="Why the stock moved")


class AdjustQuantityRequest(BaseModel):
    """Quick +/- adjustment from the item list."""

    amount: int = Field(default=1, description="Units to add or remove")
    reason: str | None = Field(
        default=None,
        max_length=200,
        description="Overrides the default manual adjustment reason",
    )


class DescriptionSuggestionRequest(BaseModel):
    """Ask for a generated description."""

    name: str = Field(..., min_length=1, max_length=100)
    category: str | None = None


class CategorySuggestionRequest(BaseModel):
    """Ask for a suggested category."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class PriceSuggestionRequest(BaseModel):
    """Ask for a suggested market price."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    category: str | None = None
