from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from veriscan.dependencies.services import get_history
from veriscan.schemas.highlight_schemas import HighlightView
from veriscan.schemas.report_schemas import AnalysisReport, DashboardStats, ReportSummary
from veriscan.utils.highlighter import build_highlight_view
from veriscan.utils.history import ReportHistory, summarize

router = APIRouter(prefix="/api", tags=["reports"])


def _get_or_404(history: ReportHistory, report_id: str) -> AnalysisReport:
    report = history.get(report_id)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Report not found: {report_id}")
    return report


@router.get("/reports", response_model=List[ReportSummary])
async def list_reports(history: ReportHistory = Depends(get_history)):
    return [summarize(r) for r in history.list()]


@router.get("/reports/current", response_model=AnalysisReport)
async def current_report(history: ReportHistory = Depends(get_history)):
    report = history.current
    if report is None:
        raise HTTPException(status_code=404, detail="No report has been generated yet")
    return report


@router.get("/reports/{report_id}", response_model=AnalysisReport)
async def get_report(report_id: str, history: ReportHistory = Depends(get_history)):
    return _get_or_404(history, report_id)


@router.get("/reports/{report_id}/highlights", response_model=HighlightView)
async def get_highlights(
    report_id: str,
    selected: Optional[int] = Query(None, ge=1, description="Index of the match to mark as selected"),
    history: ReportHistory = Depends(get_history),
):
    """Decorated segments and the source list for the report view."""
    report = _get_or_404(history, report_id)
    return build_highlight_view(report, selected_index=selected)


@router.delete("/reports", status_code=204)
async def clear_reports(history: ReportHistory = Depends(get_history)):
    history.clear()
    return Response(status_code=204)


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(history: ReportHistory = Depends(get_history)):
    return history.stats()
