# =============================================================================
# collegeconnect/main.py - Application Entry Point
# =============================================================================
# Wires the CollegeConnect backend together:
#   - middleware chain (collegeconnect/middleware/chain.py)
#   - fallback endpoints, then the route table (collegeconnect/routing.py)
#   - exception handlers (uncaught errors end in TerminalErrorMiddleware)
#   - MongoDB connector started in the background on startup
#   - Socket.IO presence channel wrapped around the HTTP app
#
# Usage:
#   python -m collegeconnect
#   uvicorn collegeconnect.main:asgi_app --port 5005
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Sequence

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from collegeconnect.config import Settings, settings as default_settings
from collegeconnect.database import DatabaseConnector
from collegeconnect.exceptions import (
    CollegeConnectException,
    collegeconnect_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from collegeconnect.middleware import build_middleware_chain
from collegeconnect.realtime import PresenceChannel
from collegeconnect.routers import status
from collegeconnect.routing import (
    DEFAULT_ROUTE_TABLE,
    RouteMount,
    build_route_index,
    mount_route_table,
)

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: start the database connection attempt without waiting for it,
      so the server accepts requests (and /health answers) immediately
    - Shutdown: stop the attempt if still running, close the client
    """
    connector: DatabaseConnector = app.state.database_connector
    logger.info(f"Starting CollegeConnect API in {app.state.settings.NODE_ENV} mode")
    logger.info(f"CORS origins: {app.state.settings.cors_origins_list}")

    connect_task = asyncio.create_task(connector.connect())

    yield

    logger.info("Shutting down CollegeConnect API")
    if not connect_task.done():
        connect_task.cancel()
        try:
            await connect_task
        except asyncio.CancelledError:
            pass
    connector.close()


def create_app(
    settings: Settings | None = None,
    *,
    connector: DatabaseConnector | None = None,
    route_table: Sequence[RouteMount] = DEFAULT_ROUTE_TABLE,
    presence: PresenceChannel | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration, defaults to the environment
        connector: Database connector, defaults to one built from settings
        route_table: Ordered route groups to mount
        presence: Realtime channel, defaults to a new Socket.IO server

    Raises:
        RouteConflictError: If two route groups declare the same route shape
    """
    settings = settings or default_settings

    app = FastAPI(
        title="CollegeConnect API",
        description="Backend for the CollegeConnect campus network.",
        version="1.0.0",
        lifespan=lifespan,
        middleware=build_middleware_chain(settings),
    )

    app.state.settings = settings
    app.state.database_connector = connector or DatabaseConnector.from_settings(settings)
    app.state.presence = presence or PresenceChannel(
        cors_allowed_origins=settings.socketio_cors_origins_list
    )
    app.state.route_index = build_route_index(route_table)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(CollegeConnectException, collegeconnect_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Root, test and health endpoints come before every route group
    app.include_router(status.router, tags=["Status"])

    mount_route_table(app, route_table)

    return app


app = create_app()

# Socket.IO in front of the HTTP app; this is what the server runs
asgi_app = app.state.presence.asgi_app(app)


def run() -> None:
    """Console entry point: serve on HOST:PORT."""
    import uvicorn

    logger.info(f"Server running on port {default_settings.PORT}")
    logger.info(f"Test endpoint: http://localhost:{default_settings.PORT}/api/test")
    uvicorn.run(
        asgi_app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
