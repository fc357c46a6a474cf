"""Low-stock notification endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from stockledger.api.dependencies import get_alerts
from stockledger.application.dto.mappers import alert_response
from stockledger.application.dto.responses import AlertListResponse
from stockledger.infrastructure.notifications import AlertBuffer

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=AlertListResponse)
async def list_notifications(
    limit: int | None = Query(default=None, ge=1),
    alerts: AlertBuffer = Depends(get_alerts),
) -> AlertListResponse:
    """Recent low-stock alerts, newest first."""
    recent = alerts.recent(limit)
    return AlertListResponse(alerts=[alert_response(a) for a in recent], total=len(recent))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(alerts: AlertBuffer = Depends(get_alerts)) -> Response:
    """Dismiss every buffered alert."""
    alerts.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
