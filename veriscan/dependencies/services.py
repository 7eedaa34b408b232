# veriscan/dependencies/services.py

from fastapi import Request

from veriscan.utils.history import ReportHistory
from veriscan.utils.model_gateway import ModelGateway
from veriscan.utils.rate_limiter import RateLimiter


def get_history(request: Request) -> ReportHistory:
    return request.app.state.history


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_gateway(request: Request) -> ModelGateway:
    return request.app.state.gateway


def get_client_address(request: Request) -> str:
    """Caller-reported address used as the quota key."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
