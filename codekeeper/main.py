#!/usr/bin/env python3
"""
Codekeeper - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All business logic is in the modules, following black box principles.
"""

import asyncio
import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from codekeeper import __version__
from codekeeper.config.provider import ConfigProvider, EnvConfigProvider
from codekeeper.exceptions import (
    CodekeeperError,
    InvalidInput,
    NoMatch,
    SessionNotFound,
    StoreUnavailable,
)
from codekeeper.logging_config import get_logging_config
from codekeeper.modules.api import (
    ActiveSessionResponse,
    CodeResponse,
    GenerateCodeRequest,
    MessageResponse,
    StartSessionRequest,
    StartSessionResponse,
    ValidateCodeRequest,
    ValidateCodeResponse,
)

# Import modules through their black box interfaces
from codekeeper.modules.codes import CodeStore
from codekeeper.modules.config import get_config
from codekeeper.modules.lifecycle import SessionLifecycle
from codekeeper.modules.session import SessionRegistry
from codekeeper.modules.storage import StorageModule

# Get configuration
config = get_config()

log_config.dictConfig(get_logging_config(config.get("log_level"), config.get("log_color")))
logger = logging.getLogger(__name__)

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()

# Module instances (initialized at startup)
storage: Optional[StorageModule] = None
lifecycle: Optional[SessionLifecycle] = None


async def report_active_sessions(registry: SessionRegistry, interval: int) -> None:
    """Log the active session count every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        logger.info(f"Active sessions: {len(registry)}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global storage, lifecycle

    # Startup
    logger.info("Starting Codekeeper API...")

    # An unreachable store raises here and the service never becomes ready
    storage = StorageModule(
        config.redis_url,
        password=config.get("redis_password"),
        socket_timeout=config.get("redis_socket_timeout"),
    )
    redis_client = await storage.connect()

    registry = SessionRegistry()
    lifecycle = SessionLifecycle(registry, CodeStore(redis_client))

    reporter = asyncio.create_task(
        report_active_sessions(registry, config.get("active_sessions_log_interval"))
    )

    logger.info(f"Codekeeper API {__version__} started successfully")

    yield

    # Shutdown
    logger.warning("Shutting down Codekeeper API...")

    reporter.cancel()
    try:
        await reporter
    except asyncio.CancelledError:
        pass

    await lifecycle.shutdown()
    await storage.disconnect()
    logger.info("Codekeeper API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Codekeeper API",
    description="Codekeeper - Short-lived access codes for event sessions",
    version=__version__,
    lifespan=lifespan,
)

api_config = config_provider.get_api_config()
app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=not api_config.allow_all_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request line."""
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


def get_lifecycle() -> SessionLifecycle:
    """Return the lifecycle module or fail if startup has not completed."""
    if not lifecycle:
        raise StoreUnavailable("Service not initialized")
    return lifecycle


# Session Endpoints


@app.post("/events/{event_id}/startSession", response_model=StartSessionResponse)
async def start_session(event_id: str, request: StartSessionRequest):
    """
    Start a session for an event and issue its first code.

    Returns:
        200: Session id, code and correlation id
        400: No eventSessionId or sessionId supplied
        503: Code store unavailable
    """
    started = await get_lifecycle().start(
        event_id,
        request.expiration_time,
        event_session_id=request.event_session_id,
        session_id=request.session_id,
    )
    return StartSessionResponse.from_started(started)


@app.post(
    "/events/{event_id}/sessions/{session_id}/generateCode", response_model=CodeResponse
)
async def generate_code(
    event_id: str, session_id: str, request: Optional[GenerateCodeRequest] = None
):
    """
    Replace a session's code with a fresh one.

    Returns:
        200: New code
        404: Session not found
        503: Code store unavailable
    """
    expiration_time = request.expiration_time if request else None
    code = await get_lifecycle().rotate(event_id, session_id, expiration_time)
    return CodeResponse(code=code)


@app.post("/validate-code", response_model=ValidateCodeResponse)
async def validate_code(request: ValidateCodeRequest):
    """
    Find the live session holding a code.

    Returns:
        200: Matching session
        400: Missing code, or no live session holds it
        503: Code store unavailable
    """
    logger.info("Attempting to validate code")
    validated = await get_lifecycle().validate(request.code or "")
    return ValidateCodeResponse.from_validated(validated)


@app.post("/events/{event_id}/sessions/{session_id}/stop", response_model=MessageResponse)
async def stop_session(event_id: str, session_id: str):
    """
    Stop a session and delete its code.

    Returns:
        200: Session stopped
        404: Session not found
    """
    await get_lifecycle().stop(event_id, session_id)
    return MessageResponse(message="Session stopped successfully")


@app.get("/active-sessions", response_model=List[ActiveSessionResponse])
async def active_sessions():
    """List every registered session, including ones whose code has lapsed."""
    return [ActiveSessionResponse.from_session(s) for s in get_lifecycle().list_active()]


# Health/Monitoring Endpoints


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness and liveness checks.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@app.get("/health")
async def health_check():
    """
    Health check including the Redis connection.

    Returns:
        200: Service healthy
        503: Service unhealthy
    """
    redis_status = "connected" if storage and await storage.ping() else "disconnected"
    modules_ready = lifecycle is not None

    body = {
        "status": "healthy",
        "redis": redis_status,
        "modules": "initialized" if modules_ready else "not initialized",
        "activeSessions": len(lifecycle.list_active()) if modules_ready else 0,
        "version": __version__,
    }
    if redis_status == "connected" and modules_ready:
        return body

    body["status"] = "unhealthy"
    return JSONResponse(status_code=503, content=body)


@app.get("/metrics")
async def metrics():
    """
    Prometheus-compatible metrics endpoint.

    Returns basic metrics about the system.
    """
    if not lifecycle:
        return Response(content="", status_code=503)

    metrics_text = f"""# HELP codekeeper_active_sessions Number of registered event sessions
# TYPE codekeeper_active_sessions gauge
codekeeper_active_sessions {len(lifecycle.list_active())}
"""

    return Response(content=metrics_text, media_type="text/plain")


# Error handlers


ERROR_STATUS = {
    InvalidInput: 400,
    NoMatch: 400,
    SessionNotFound: 404,
    StoreUnavailable: 503,
}


@app.exception_handler(CodekeeperError)
async def codekeeper_error_handler(request, exc: CodekeeperError):
    """Map core errors to HTTP responses."""
    status_code = ERROR_STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"Error handling {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc: RequestValidationError):
    """Handle request body validation errors."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


def main():
    """Run the API server with uvicorn."""
    uvicorn.run(
        "codekeeper.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level"), config.get("log_color")),
    )


if __name__ == "__main__":
    main()
