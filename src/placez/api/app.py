"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from placez.api.csrf import CSRFMiddleware
from placez.api.csrf import router as csrf_router
from placez.api.places import router as places_router
from placez.api.users import router as users_router
from placez.app_logging import configure_logging
from placez.config import parse_allowed_origins
from placez.containers import AppContainer
from placez.errors import PlacezError, ValidationError

_CSRF_EXEMPT_PREFIXES = ("/api/users", "/api/places")


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Placez API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(CSRFMiddleware, exempt_prefixes=_CSRF_EXEMPT_PREFIXES)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret or settings.jwt_secret,
        session_cookie="session",
        same_site="lax",
        https_only=settings.cookie_secure,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Origin",
            "Content-Type",
            "Accept",
            "Authorization",
            "X-CSRF-Token",
        ],
    )

    @app.exception_handler(PlacezError)
    async def placez_error_handler(request: Request, exc: PlacezError) -> JSONResponse:
        return JSONResponse({"message": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            {"message": ValidationError.default_message},
            status_code=ValidationError.status_code,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            {"message": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error", extra={"path": request.url.path}, exc_info=exc
        )
        return JSONResponse({"message": PlacezError.default_message}, status_code=500)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(users_router)
    app.include_router(csrf_router)
    app.include_router(places_router)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads/images", StaticFiles(directory=upload_dir), name="uploads")

    build_dir = Path(settings.frontend_build_dir).resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str) -> Response:
        """Serve the built front end, falling back to its index page."""
        if full_path == "api" or full_path.startswith("api/"):
            return _route_not_found()
        candidate = (build_dir / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(build_dir):
            return FileResponse(candidate)
        index = build_dir / "index.html"
        if index.is_file():
            return FileResponse(index)
        return _route_not_found()

    return app


def _route_not_found() -> JSONResponse:
    return JSONResponse({"message": "Could not find this route."}, status_code=404)
