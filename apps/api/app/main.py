"""FastAPI application for the vehicle marketplace API."""
from __future__ import annotations

import base64
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .core.config import settings
from .core.errors import DomainError, ErrorCode
from .routers import account, admin, dealer, listings, selection

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Vehicle Marketplace API", version="0.1.0")

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[selection.CLIENT_ID_HEADER],
    )

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.COMPARE_FULL: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_WRITE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render domain errors as ``{"code", "detail"}`` with a matching status."""

    status_code = ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"code": exc.code.value, "detail": exc.message})


app.include_router(listings.router, prefix="/api", tags=["listings"])
app.include_router(selection.router, prefix="/api", tags=["selection"])
app.include_router(account.router, prefix="/api/account", tags=["account"])
app.include_router(dealer.router, prefix="/api/dealer", tags=["dealer"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/", tags=["meta"])
async def index() -> dict[str, str]:
    return {"name": app.title, "docs": "/docs"}


@app.head("/", tags=["meta"])
async def index_head() -> Response:
    """Fast health checks issue HEAD /; answer with 200 to avoid noisy 405s."""

    return Response(status_code=200)


FAVICON_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQABDQottAAAAABJRU5ErkJggg=="
)


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness probe."""

    return {"status": "ok"}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)


@app.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
async def robots() -> PlainTextResponse:
    return PlainTextResponse("User-agent: *\nDisallow:")


@app.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    return Response(content=FAVICON_BYTES, media_type="image/png")
