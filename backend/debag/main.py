# main.py
"""
Entry point of the DeBag Metrics API.
Registers every module through its router.

Architecture: vertical modules (router → service → repository) + a pure
engine (aggregation, CSV) with zero DB access.

Every error leaves the API as {"error": "<message>"}.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from debag.core.config import settings
from debag.core.database import dispose_engine
from debag.core.logging_config import setup_logging
from debag.shared.deps import PUBLIC_PATHS, UNAUTHORIZED_PIN, is_pin_authorized
from debag.shared.validators import first_error_message

from debag.modules.people.router       import router as people_router
from debag.modules.observations.router import router as observations_router
from debag.modules.reports.router      import router as reports_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)
    logger.info("%s %s starting", settings.PROJECT_NAME, settings.VERSION)
    yield
    await dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ── App PIN gate (runs before any body or query parsing) ─────

@app.middleware("http")
async def require_app_pin(request: Request, call_next):
    if request.url.path in PUBLIC_PATHS or request.method == "OPTIONS":
        return await call_next(request)
    if not is_pin_authorized(request.headers.get("x-app-pin")):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": UNAUTHORIZED_PIN},
        )
    return await call_next(request)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(people_router)
app.include_router(observations_router)
app.include_router(reports_router)


# ── Error bodies ─────────────────────────────────────────────

@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    message = first_error_message(exc.errors())
    logger.warning("Validation rejected on %s: %s", request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error."},
    )


@app.get("/health")
async def health():
    return {"status": "ok", "version": settings.VERSION}
