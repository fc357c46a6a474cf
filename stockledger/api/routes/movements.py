"""Movement history endpoints."""

from fastapi import APIRouter, Depends, Query

from stockledger.api.dependencies import get_engine
from stockledger.application.dto.mappers import movement_response
from stockledger.application.dto.responses import MovementListResponse
from stockledger.core.entities import MovementType
from stockledger.core.services import LedgerEngine, search_movements

router = APIRouter(prefix="/api/movements", tags=["movements"])


@router.get("", response_model=MovementListResponse)
async def list_movements(
    q: str | None = Query(default=None, description="Search item name or reason"),
    movement_type: MovementType | None = Query(default=None),
    sort_by: str = Query(default="date"),
    descending: bool = Query(default=True),
    engine: LedgerEngine = Depends(get_engine),
) -> MovementListResponse:
    """All movements, newest first by default."""
    movements = search_movements(engine.movements, q, movement_type, sort_by, descending)
    return MovementListResponse(
        movements=[movement_response(m) for m in movements],
        total=len(movements),
    )
