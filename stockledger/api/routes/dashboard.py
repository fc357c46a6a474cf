"""Dashboard endpoint."""

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_dashboard_use_case
from stockledger.application.dto.responses import DashboardResponse
from stockledger.application.use_cases import BuildDashboardUseCase

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    use_case: BuildDashboardUseCase = Depends(get_dashboard_use_case),
) -> DashboardResponse:
    """Inventory totals, per-category breakdown and the latest movements."""
    result = await use_case.execute()
    return use_case.to_response(result)
