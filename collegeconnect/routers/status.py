# =============================================================================
# collegeconnect/routers/status.py - Root, Test and Health Endpoints
# =============================================================================
# Always available, independent of the route table and of the database.
# /health reports process liveness; it answers 200 even when the database
# is down.
# =============================================================================

from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel

from collegeconnect.database import ConnectionState
from collegeconnect.dependencies import ConnectorDep
from collegeconnect.utils import utc_timestamp

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str
    database: Literal["connected", "disconnected"]


class TestResponse(BaseModel):
    message: str
    timestamp: str


class RootResponse(BaseModel):
    """API index."""
    message: str
    status: str
    database: Literal["connected", "disconnected"]
    timestamp: str
    endpoints: dict[str, str]
    total_endpoints: int


def database_label(state: ConnectionState) -> Literal["connected", "disconnected"]:
    return "connected" if state is ConnectionState.CONNECTED else "disconnected"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=RootResponse)
async def root(request: Request, connector: ConnectorDep):
    """
    Root endpoint - returns API info.

    Lists the mounted route groups; meant for humans, not as a contract.
    """
    route_index: dict[str, str] = request.app.state.route_index
    return RootResponse(
        message="CollegeConnect Backend API is Running!",
        status="success",
        database=database_label(connector.state),
        timestamp=utc_timestamp(),
        endpoints={**route_index, "test": "/api/test", "health": "/health"},
        total_endpoints=len(route_index),
    )


@router.get("/api/test", response_model=TestResponse)
async def test_endpoint():
    return TestResponse(message="Server is running correctly", timestamp=utc_timestamp())


@router.get("/health", response_model=HealthResponse)
async def health_check(connector: ConnectorDep):
    """
    Health check endpoint for uptime monitors.

    `database` is "connected" only while the connector reports CONNECTED.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        database=database_label(connector.state),
    )
