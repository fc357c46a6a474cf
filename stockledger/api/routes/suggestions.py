"""AI suggestion endpoints for the item form.

Failures come back as 503 SUGGESTION_UNAVAILABLE; the form keeps working
without them.
"""

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_suggestions
from stockledger.application.dto.requests import (
    CategorySuggestionRequest,
    DescriptionSuggestionRequest,
    PriceSuggestionRequest,
)
from stockledger.application.dto.responses import (
    CategorySuggestionResponse,
    DescriptionSuggestionResponse,
    ErrorResponse,
    PriceSuggestionResponse,
)
from stockledger.core.services import SuggestionService

router = APIRouter(
    prefix="/api/suggestions",
    tags=["suggestions"],
    responses={503: {"model": ErrorResponse}},
)


@router.post("/description", response_model=DescriptionSuggestionResponse)
async def suggest_description(
    request: DescriptionSuggestionRequest,
    service: SuggestionService = Depends(get_suggestions),
) -> DescriptionSuggestionResponse:
    result = await service.generate_description(request.name, request.category)
    return DescriptionSuggestionResponse(description=result.description)


@router.post("/category", response_model=CategorySuggestionResponse)
async def suggest_category(
    request: CategorySuggestionRequest,
    service: SuggestionService = Depends(get_suggestions),
) -> CategorySuggestionResponse:
    result = await service.suggest_category(request.name, request.description)
    return CategorySuggestionResponse(suggested_category=result.suggested_category)


@router.post("/price", response_model=PriceSuggestionResponse)
async def suggest_price(
    request: PriceSuggestionRequest,
    service: SuggestionService = Depends(get_suggestions),
) -> PriceSuggestionResponse:
    result = await service.suggest_price(request.name, request.description, request.category)
    return PriceSuggestionResponse(
        suggested_price=result.suggested_price,
        reasoning=result.reasoning,
    )
