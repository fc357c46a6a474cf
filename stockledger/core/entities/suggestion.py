"""Entities returned by the AI suggestion service."""

from pydantic import BaseModel, Field


class DescriptionSuggestion(BaseModel):
    """Generated item description."""

    description: str = Field(..., min_length=1, max_length=500)


class CategorySuggestion(BaseModel):
    """Suggested item category."""

    suggested_category: str = Field(..., min_length=1, max_length=50)


class PriceSuggestion(BaseModel):
    """Suggested market price; either field may be missing."""

    suggested_price: float | None = Field(default=None, ge=0)
    reasoning: str | None = None
