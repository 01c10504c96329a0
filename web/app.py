# =============================================================================
# web/app.py  —  HTTP front end (FastAPI)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   A thin JSON API over the same operations the MCP tool server exposes:
#
#     POST /api/plan-trip             → plan_trip
#     POST /api/compare-destinations  → compare_destinations
#     POST /api/get-weather           → get_travel_weather
#     POST /api/convert-currency      → convert_currency
#     POST /api/translate             → translate_text
#     GET  /api/health                → status, supervised servers, provider modes
#
#   Bodies use the camelCase field names (startDate, targetLanguage, ...).
#
# ERRORS:
#   Invalid input and upstream failures answer 200 {"error": "<message>"}.
#   Anything unexpected is logged with its traceback and answers
#   500 {"error": "Failed to <action>"}; internals never leak to the client.
#
# LIFECYCLE:
#   The lifespan builds the providers (and closes their HTTP client), and,
#   when SPAWN_TOOL_SERVERS is on, starts and stops the tool-server
#   registry.
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.errors import ProviderError, ValidationError
from core.operations import OPERATION_DOMAINS, TravelOperations
from core.providers import build_providers
from web.supervisor import ToolServerRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Quiet noisy libraries
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    operations: Optional[TravelOperations] = None,
    registry: Optional[ToolServerRegistry] = None,
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        settings: Configuration; read from the environment at startup when
            omitted.
        operations: Pre-built operations (tests).  Built from settings at
            startup when omitted, and closed at shutdown.
        registry: Tool-server registry to start and stop with the app.
            When omitted, one is created only if SPAWN_TOOL_SERVERS is on.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = settings or get_settings()

        owned_providers = None
        ops = operations
        if ops is None:
            owned_providers = build_providers(config)
            ops = TravelOperations(owned_providers)
        logger.info("Providers: %s", ops.providers.modes)

        servers = registry
        if servers is None and config.spawn_tool_servers:
            servers = ToolServerRegistry()

        app.state.operations = ops
        app.state.registry = servers

        if servers is not None:
            logger.info("Starting MCP servers...")
            await servers.start()
        try:
            yield
        finally:
            logger.info("Shutting down gracefully...")
            if servers is not None:
                await servers.stop()
            if owned_providers is not None:
                await owned_providers.aclose()

    app = FastAPI(
        title="Smart Travel Planning Assistant",
        description="Weather, currency and translation aggregated into travel plans",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------
    @app.get("/api/health")
    async def health(request: Request):
        registry_ = request.app.state.registry
        return {
            "status": "ok",
            "servers": registry_.names if registry_ is not None else [],
            "providers": request.app.state.operations.providers.modes,
        }

    @app.post("/api/plan-trip")
    async def plan_trip(request: Request):
        return await _dispatch(request, "plan_trip", "Failed to plan trip")

    @app.post("/api/compare-destinations")
    async def compare_destinations(request: Request):
        return await _dispatch(request, "compare_destinations", "Failed to compare destinations")

    @app.post("/api/get-weather")
    async def get_weather(request: Request):
        return await _dispatch(request, "get_travel_weather", "Failed to get weather")

    @app.post("/api/convert-currency")
    async def convert_currency(request: Request):
        return await _dispatch(request, "convert_currency", "Failed to convert currency")

    @app.post("/api/translate")
    async def translate(request: Request):
        return await _dispatch(request, "translate_text", "Failed to translate text")

    return app


async def _dispatch(request: Request, operation: str, failure_message: str) -> JSONResponse:
    """Run one operation for an HTTP request and shape the JSON response."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Request body must be valid JSON"})
    if not isinstance(body, dict):
        return JSONResponse({"error": "Request body must be a JSON object"})

    try:
        result = await request.app.state.operations.call(operation, body)
    except ValidationError as exc:
        return JSONResponse({"error": str(exc)})
    except ProviderError as exc:
        logger.warning("%s failed upstream: %s", operation, exc)
        return JSONResponse({"error": f"{OPERATION_DOMAINS[operation]} error: {exc.message}"})
    except Exception:
        logger.exception("%s failed", operation)
        return JSONResponse({"error": failure_message}, status_code=500)

    return JSONResponse(result)


app = create_app()


def run() -> None:
    """Serve the HTTP front end with uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "🌍 Smart Travel Planning Assistant running on http://%s:%d",
        settings.host, settings.port,
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
