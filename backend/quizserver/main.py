"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from quizserver.api import admin_router, health_router, student_router, users_router
from quizserver.config import settings
from quizserver.core.errors import QuizServerError, StorageError
from quizserver.db.session import init_db
from quizserver.schemas.common import ErrorResponse

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s  %(name)-25s  %(levelname)-8s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 quizserver starting…")
    try:
        init_db()
    except Exception:
        # No storage, no service: let the server process exit.
        logger.exception("Database connection failed")
        raise
    settings.upload_path.mkdir(parents=True, exist_ok=True)
    yield
    logger.info("✅ quizserver shut down")


app = FastAPI(
    title="Quiz Server API",
    description="Quiz administration, time-windowed attempts and automatic scoring",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Middleware ─────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

# ── Error handlers ────────────────────────────────────────────────────────────


def _error_response(exc: QuizServerError) -> JSONResponse:
    body = ErrorResponse(
        error_code=exc.error_code, message=exc.message, details=exc.details
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(QuizServerError)
async def quizserver_error_handler(request: Request, exc: QuizServerError):
    logger.info(
        "%s %s -> %s (%s)", request.method, request.url.path, exc.error_code, exc.message
    )
    return _error_response(exc)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(StorageError("Storage temporarily unavailable"))


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(health_router, tags=["Health"])
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(student_router, prefix="/api/student", tags=["Student"])
app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])

app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
async def root():
    return {
        "name": "Quiz Server API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
