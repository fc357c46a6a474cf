"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ItemResponse(BaseModel):
    """Inventory item."""

    id: str = Field(..., description="Item ID")
    name: str = Field(..., description="Item name")
    description: str = Field(default="", description="Description")
    quantity: int = Field(..., description="Quantity on hand")
    price: float | None = Field(default=None, description="Unit price")
    category: str | None = Field(default=None, description="Category")
    low_stock_threshold: int | None = Field(default=None, description="Low-stock threshold")
    total_value: float = Field(..., description="quantity * price")
    is_low_stock: bool = Field(default=False, description="Quantity below threshold")
    date_added: datetime
    last_updated: datetime


class MovementResponse(BaseModel):
    """One ledger movement."""

    id: str = Field(..., description="Movement ID")
    item_id: str = Field(..., description="Item the movement applied to")
    item_name: str = Field(..., description="Item name when the movement happened")
    movement_type: str = Field(..., description="entrada or salida")
    quantity_changed: int = Field(..., description="Units moved")
    reason: str = Field(default="", description="Reason")
    date: datetime


class MovementListResponse(BaseModel):
    """Movements, newest first unless sorted otherwise."""

    movements: list[MovementResponse]
    total: int


class ItemListResponse(BaseModel):
    """Items matching a search."""

    items: list[ItemResponse]
    total: int


class StockChangeResponse(BaseModel):
    """Result of a quantity-affecting operation."""

    item: ItemResponse
    movement: MovementResponse | None = Field(
        default=None, description="None when the quantity did not change"
    )
    low_stock_notified: bool = False


class CategorySummaryResponse(BaseModel):
    """Per-category dashboard totals."""

    category: str
    unique_items: int
    total_quantity: int
    total_value: float


class DashboardResponse(BaseModel):
    """Dashboard aggregates."""

    total_unique_items: int
    total_quantity: int
    total_value: float
    low_stock_count: int
    most_stocked: ItemResponse | None = None
    categories: list[CategorySummaryResponse] = Field(default_factory=list)
    recent_movements: list[MovementResponse] = Field(default_factory=list)


class AlertResponse(BaseModel):
    """Low-stock alert."""

    item_name: str
    current_quantity: int
    threshold: int
    message: str
    created_at: datetime


class AlertListResponse(BaseModel):
    alerts: list[AlertResponse]
    total: int


class DescriptionSuggestionResponse(BaseModel):
    description: str


class CategorySuggestionResponse(BaseModel):
    suggested_category: str


class PriceSuggestionResponse(BaseModel):
    suggested_price: float | None = None
    reasoning: str | None = None


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class LedgerHealthResponse(BaseModel):
    """Ledger engine state."""

    initialized: bool
    live: bool
    backend: str
    items: int
    movements: int
    persistence_failures: int
    last_persistence_error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    ledger: LedgerHealthResponse | None = None
    llm: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
