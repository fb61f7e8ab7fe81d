import logging
from typing import Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from homecare.auth import get_token_service
from homecare.config import get_settings
from homecare.database import engine, Base
from homecare import models  # noqa: F401  (registers every table on Base.metadata)
from homecare.exceptions import HomecareError, Unauthenticated
from homecare.logging_config import setup_logging
from homecare.routers import messages, nurses, patients, service_requests, support, transactions, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Shutdown
    await engine.dispose()


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Responses carry per-identity records; keep them out of shared caches."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store"
        return response


def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def homecare_error_handler(request: Request, exc: HomecareError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return _error(exc.status_code, exc.message, headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected payload on %s: %s", request.url.path, exc.errors())
    return _error(400, "Invalid request payload")


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    # Fail at startup, not on the first request, if the signing secret is unusable.
    get_token_service()

    app = FastAPI(
        title=settings.project_name,
        description="In-home nursing services between clients and nurses",
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(NoCacheMiddleware)

    app.add_exception_handler(HomecareError, homecare_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(nurses.router, prefix="/api/nurses", tags=["Nurses"])
    app.include_router(patients.router, prefix="/api/patients", tags=["Patients"])
    app.include_router(service_requests.router, prefix="/api/service-requests", tags=["ServiceRequests"])
    app.include_router(transactions.router, prefix="/api/transactions", tags=["Transactions"])
    app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])
    app.include_router(support.router, prefix="/api/support", tags=["Support"])

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy", "service": "homecare-api"}

    return app


app = create_app()
