from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from api.models import WebhookUrlRequest
from cotrac_onboarding.schemas.wizard import DashboardSummary
from cotrac_onboarding.wizard.dashboard import StaffDashboard

router = APIRouter(prefix="/api/admin", tags=["admin"])


def get_dashboard(request: Request) -> StaffDashboard:
    return request.app.state.dashboard


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(board: StaffDashboard = Depends(get_dashboard)) -> DashboardSummary:
    return board.summary()


@router.put("/webhook", response_model=DashboardSummary)
async def update_webhook(body: WebhookUrlRequest, board: StaffDashboard = Depends(get_dashboard)) -> DashboardSummary:
    """Persisted immediately; new wizard submissions sync to this URL."""
    board.update_webhook_url(body.webhook_url)
    return board.summary()


@router.get("/export.csv")
async def export_csv(board: StaffDashboard = Depends(get_dashboard)) -> Response:
    return Response(
        content=board.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="cotrac_submissions.csv"'},
    )
