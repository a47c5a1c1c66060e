# =============================================================================
# collegeconnect/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from collegeconnect.database import DatabaseConnector


def get_connector(request: Request) -> DatabaseConnector:
    """Return the connector owned by the running application."""
    return request.app.state.database_connector


def get_database(connector: DatabaseConnector = Depends(get_connector)) -> Any:
    """
    Get the motor database handle.

    Raises DatabaseUnavailableError (503) while the connection is down.
    """
    return connector.database


# Type aliases for dependency injection
ConnectorDep = Annotated[DatabaseConnector, Depends(get_connector)]
DatabaseDep = Annotated[Any, Depends(get_database)]
