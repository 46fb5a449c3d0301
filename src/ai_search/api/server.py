"""FastAPI server for AI Search.

Provides the REST API consumed by the React frontend.

Endpoints:
    /api/search       - Run a search (LangGraph pipeline), read/bookmark/delete results
    /api/history      - Paginated search history, bookmarks, clear history
    /api/collections  - User-owned groups of searches
    /api/auth         - Register, login, profile, password
    /api/users/me     - Current user profile
    GET /api/health   - Health check
"""

import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_search.api.routers import auth, collections, history, search, users
from ai_search.config import settings
from ai_search.db.database import init_db
from ai_search.llm.providers import check_provider_health, is_gemini_configured
from ai_search.types.api import HealthResponse
from ai_search.utils.logging import request_id_var, setup_logger

logger = setup_logger(__name__, settings.log_level)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    provider = check_provider_health(settings)
    logger.info(
        "AI Search API started",
        extra={
            "summarizer_provider": provider["provider"],
            "summarizer_configured": provider["healthy"],
            "duckduckgo_backup": settings.use_duckduckgo_backup,
        },
    )
    yield


# =============================================================================
# FastAPI App
# =============================================================================
app = FastAPI(
    title="AI Search API",
    description="Backend API for conversational AI search.",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag each request with an id and log method, path, status and duration.

    Unhandled errors are logged here and answered with a generic 500, so the
    response still carries the request id.
    """
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    start_time = time.perf_counter()
    token = request_id_var.set(request_id)

    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception(
            f"Unhandled error on {request.method} {request.url.path}: {e}",
            extra={"request_id": request_id},
        )
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
    finally:
        request_id_var.reset(token)

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers["X-Request-ID"] = request_id
    logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={"request_id": request_id, "duration_ms": round(duration_ms, 1)},
    )
    return response


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 instead of FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# =============================================================================
# Routers
# =============================================================================
app.include_router(auth.router)
app.include_router(search.router)
app.include_router(history.router)
app.include_router(collections.router)
app.include_router(users.router)


# =============================================================================
# Endpoints
# =============================================================================


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "AI Search API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }


@app.get("/api/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint. Reports configuration only; no upstream calls."""
    provider = check_provider_health(settings)
    return HealthResponse(
        version=API_VERSION,
        summarizer_provider=settings.summarizer_provider,
        summarizer_configured=bool(provider["healthy"]),
        gemini_configured=is_gemini_configured(settings),
        duckduckgo_backup=settings.use_duckduckgo_backup,
        timestamp=datetime.now(timezone.utc),
    )
