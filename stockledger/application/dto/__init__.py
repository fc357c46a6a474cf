"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stockledger.application.dto.requests import (
    AdjustQuantityRequest,
    CategorySuggestionRequest,
    DescriptionSuggestionRequest,
    ItemFormRequest,
    PriceSuggestionRequest,
    StockMovementRequest,
)
from stockledger.application.dto.responses import (
    AlertListResponse,
    AlertResponse,
    CategorySuggestionResponse,
    CategorySummaryResponse,
    DashboardResponse,
    DescriptionSuggestionResponse,
    ErrorResponse,
    HealthResponse,
    ItemListResponse,
    ItemResponse,
    LedgerHealthResponse,
    MovementListResponse,
    MovementResponse,
    PriceSuggestionResponse,
    ProviderHealthResponse,
    StockChangeResponse,
)

__all__ = [
    # Requests
    "ItemFormRequest",
    "StockMovementRequest",
    "AdjustQuantityRequest",
    "DescriptionSuggestionRequest",
    "CategorySuggestionRequest",
    "PriceSuggestionRequest",
    # Responses
    "ItemResponse",
    "ItemListResponse",
    "MovementResponse",
    "MovementListResponse",
    "StockChangeResponse",
    "DashboardResponse",
    "CategorySummaryResponse",
    "AlertResponse",
    "AlertListResponse",
    "DescriptionSuggestionResponse",
    "CategorySuggestionResponse",
    "PriceSuggestionResponse",
    "HealthResponse",
    "LedgerHealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
