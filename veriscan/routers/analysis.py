import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from veriscan.config import MAX_TEXT_LENGTH
from veriscan.dependencies.services import get_client_address, get_gateway, get_history, get_rate_limiter
from veriscan.schemas.report_schemas import AnalysisReport, AnalyzeRequest, ErrorResponse
from veriscan.utils.analysis_pipeline import run_analysis
from veriscan.utils.history import ReportHistory
from veriscan.utils.model_gateway import GatewayError, ModelGateway
from veriscan.utils.rate_limiter import RateLimiter

router = APIRouter(prefix="/api", tags=["analysis"])
logger = logging.getLogger("analysis")


def _quota_headers(limiter: RateLimiter, remaining: int) -> Dict[str, str]:
    return {
        "X-RateLimit-Limit": str(limiter.limit),
        "X-RateLimit-Remaining": str(remaining),
    }


@router.post(
    "/analyze",
    response_model=AnalysisReport,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse},
               500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def analyze(
    payload: AnalyzeRequest,
    response: Response,
    client_address: str = Depends(get_client_address),
    limiter: RateLimiter = Depends(get_rate_limiter),
    gateway: ModelGateway = Depends(get_gateway),
    history: ReportHistory = Depends(get_history),
):
    quota = limiter.check(client_address)
    headers = _quota_headers(limiter, quota.remaining)
    response.headers.update(headers)

    if not quota.allowed:
        raise HTTPException(
            status_code=429,
            detail={"error": "Rate limit exceeded. Please try again later.", "retryAfter": quota.retry_after},
            headers={**headers, "Retry-After": str(quota.retry_after)},
        )

    text = payload.text or ""
    file_name = (payload.fileName or "").strip()
    if not text.strip() or not file_name:
        raise HTTPException(status_code=400, detail="Missing required fields: text and fileName", headers=headers)

    if len(text) > MAX_TEXT_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Text too long. Maximum {MAX_TEXT_LENGTH:,} characters allowed.",
            headers=headers,
        )

    if not gateway.is_configured:
        logger.error("Model gateway credentials not configured")
        raise HTTPException(status_code=500, detail="Server configuration error", headers=headers)

    try:
        report = await run_analysis(text, file_name, gateway)
    except GatewayError as e:
        logger.error(f"❌ Analysis failed for {file_name}: {e}")
        raise HTTPException(status_code=502, detail="Analysis failed. Please try again.", headers=headers)

    history.add(report)
    return report
