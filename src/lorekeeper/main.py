"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from lorekeeper.api.v1.router import router as api_router
from lorekeeper.config import Settings, get_settings
from lorekeeper.container import Services, build_services
from lorekeeper.scheduler.jobs import SchedulerService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    logger.info("Starting Lorekeeper application...")
    logger.info(f"Environment: {settings.environment}")

    if getattr(app.state, "services", None) is None:
        app.state.services = build_services(settings)
    services: Services = app.state.services

    scheduler = SchedulerService(services.job_tracker, services.cache, settings)
    scheduler.start()

    yield

    scheduler.shutdown()
    if services.job_tracker.in_flight:
        logger.warning(
            f"Shutting down with {services.job_tracker.in_flight} summarization(s) in flight"
        )
    if services.engine is not None:
        await services.engine.dispose()
    logger.info("Shutting down Lorekeeper application...")


def _register_error_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": ...}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            {"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())},
            status_code=422,
        )


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration (defaults to environment settings)
        services: Prebuilt collaborators; built at startup when omitted
    """
    settings = settings or get_settings()

    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="Lorekeeper",
        description="Story summaries and in-character answers powered by an LLM",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Server is running."

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Lightweight health check with DB connectivity test."""
        try:
            async with app.state.services.session_factory() as session:
                await session.execute(text("SELECT 1"))
            return JSONResponse({"status": "healthy", "database": "connected"})
        except Exception:
            return JSONResponse(
                {"status": "unhealthy", "database": "disconnected"},
                status_code=503,
            )

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("lorekeeper.main:app", host=settings.host, port=settings.port)


# Create app instance
app = create_app()


if __name__ == "__main__":
    run()
