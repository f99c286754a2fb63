import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware

from worklog.api.deps import AppContainer
from worklog.api.error_handlers import register_error_handlers
from worklog.api.main import api_router
from worklog.core.config import Settings, get_settings
from worklog.core.observability import (
    get_logger,
    set_correlation_id,
    setup_structured_logging,
)

logger = get_logger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags every request with a correlation id and logs its outcome."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get("X-Correlation-ID"))
        start_time = time.time()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                method=method,
                path=path,
                duration_seconds=time.time() - start_time,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id
        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_seconds=time.time() - start_time,
        )
        return response


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


def create_app(
    settings: Settings | None = None, container: AppContainer | None = None
) -> FastAPI:
    """
    Build the work-record API.

    Each call gets its own container unless one is passed in, so separate
    apps (and separate tests) never share tasks or cached reference data.
    """
    settings = settings or get_settings()
    container = container or AppContainer.build(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_structured_logging(settings)
        logger.info(
            "Starting application",
            project_name=settings.PROJECT_NAME,
            environment=settings.ENVIRONMENT,
            scenario=container.scenarios.current.value,
            tasks=container.repository.count(),
        )

        # The API serves tasks without reference data; a failed load is
        # retried by the first request that needs the cache.
        try:
            await container.reference_cache.initialize()
        except Exception as e:
            logger.warning("Reference data unavailable at startup", error=str(e))

        try:
            yield
        finally:
            await container.aclose()
            logger.info("Shutting down application")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Daily work records with cached reference data.",
        version="0.1.0",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(ObservabilityMiddleware)
    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
