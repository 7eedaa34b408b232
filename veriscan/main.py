import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import veriscan.logger  # noqa: F401  configures logging
from veriscan.config import CORS_ORIGINS
from veriscan.routers.analysis import router as analysis_router
from veriscan.routers.extraction import router as extraction_router
from veriscan.routers.reports import router as reports_router
from veriscan.utils.history import ReportHistory
from veriscan.utils.model_gateway import ModelGateway
from veriscan.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.history = ReportHistory()
    app.state.rate_limiter = RateLimiter()
    app.state.gateway = ModelGateway()
    logger.info("VeriScan session started")
    yield
    app.state.history.clear()
    logger.info("VeriScan session ended")


app = FastAPI(title="VeriScan API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    in_body = any(err.get("loc", ("",))[0] == "body" for err in exc.errors())
    message = "Invalid request body" if in_body else "Invalid request parameters"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Analysis failed. Please try again."})


@app.get("/health")
async def health(request: Request):
    return {"status": "ok", "gatewayConfigured": request.app.state.gateway.is_configured}


app.include_router(analysis_router)
app.include_router(extraction_router)
app.include_router(reports_router)
