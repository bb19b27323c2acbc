"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pvz_store.api.auth import router as auth_router
from pvz_store.api.pvz import router as pvz_router
from pvz_store.app_logging import configure_logging
from pvz_store.containers import AppContainer
from pvz_store.errors import (
    ForbiddenRole,
    InvalidClaims,
    InvalidToken,
    PvzStoreError,
    StorageError,
    TokenEncodingFailed,
    Unauthenticated,
    UserNotFound,
    WrongPassword,
)
from pvz_store.rpc.server import create_grpc_server

_STATUS_BY_ERROR: dict[type[PvzStoreError], int] = {
    UserNotFound: status.HTTP_401_UNAUTHORIZED,
    WrongPassword: status.HTTP_401_UNAUTHORIZED,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    InvalidToken: status.HTTP_401_UNAUTHORIZED,
    InvalidClaims: status.HTTP_401_UNAUTHORIZED,
    ForbiddenRole: status.HTTP_403_FORBIDDEN,
    TokenEncodingFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INVALID_REQUEST = "ERR_INVALID_REQUEST"


def status_for(error: PvzStoreError) -> int:
    """Return the HTTP status for an application error; 400 unless listed."""
    for error_type in type(error).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        grpc_server = None
        if settings.grpc_enabled:
            grpc_server, port = create_grpc_server(
                app.state.container.pvz_service,
                f"[::]:{settings.grpc_port}",
                max_workers=settings.grpc_max_workers,
            )
            grpc_server.start()
            logger.info("gRPC server listening on port %s", port)
        yield
        if grpc_server is not None:
            grpc_server.stop(grace=5).wait()
            logger.info("gRPC server stopped")

    app = FastAPI(title="PVZ Store", lifespan=lifespan)
    app.state.container = container

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.4fs)",
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - started,
        )
        return response

    @app.exception_handler(PvzStoreError)
    async def handle_app_error(request: Request, exc: PvzStoreError) -> JSONResponse:
        status_code = status_for(exc)
        if isinstance(exc, StorageError):
            logger.error("Storage failure on %s: %s", request.url.path, exc)
            return JSONResponse(
                status_code=status_code, content={"message": "internal error"}
            )
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        return JSONResponse(
            status_code=status_code, content={"message": exc.code}, headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": INVALID_REQUEST},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(pvz_router)
    return app
