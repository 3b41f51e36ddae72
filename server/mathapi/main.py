from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mathapi.api.routes import calculator, mcp
from mathapi.core.config import get_settings
from mathapi.core.exceptions import register_exception_handlers
from mathapi.core.logging import configure_logging
from mathapi.core.middleware import RequestContextMiddleware
from mathapi.models.calculator import HealthResponse


def create_app(log_level: str | None = None) -> FastAPI:
    """
    Application factory for the math API.
    Routes are attached in their respective modules and imported here.
    """

    settings = get_settings()
    configure_logging(log_level or settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        description="Evaluates arithmetic and LaTeX expressions over HTTP and MCP JSON-RPC.",
        version=settings.api_version,
    )

    cors_origins = settings.resolved_cors_origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials="*" not in cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(calculator.router)
    app.include_router(mcp.router)

    @app.api_route("/health", methods=["GET", "POST"], tags=["health"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(status="ok", version=settings.api_version, service=settings.service_name)

    return app
