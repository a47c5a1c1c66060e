# =============================================================================
# collegeconnect/database.py - MongoDB Connector
# =============================================================================
# Opens one motor client for the process and tracks its connection state.
#
# The connector is the only writer of ConnectionState. Everything else reads
# it through DatabaseConnector.state (health endpoints) or asks for the
# database handle, which refuses when not connected.
#
# Usage:
#   connector = DatabaseConnector(settings.MONGO_URI)
#   await connector.connect()      # never raises, sets state instead
#   db = connector.database        # raises DatabaseUnavailableError
#   connector.close()
# =============================================================================

import logging
from enum import Enum
from typing import Any, Callable

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import monitoring
from pymongo.errors import PyMongoError

from collegeconnect.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """Status of the datastore connection."""
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


class _TopologyListener(monitoring.TopologyListener):
    """
    Forwards driver topology events to the connector.

    pymongo invokes these from its monitor threads.
    """

    def __init__(self, connector: "DatabaseConnector"):
        self._connector = connector

    def opened(self, event):
        logger.debug(f"MongoDB topology opened: {event.topology_id}")

    def description_changed(self, event):
        self._connector._on_topology_changed(event.new_description.has_writable_server())

    def closed(self, event):
        self._connector._on_topology_closed()


class DatabaseConnector:
    """
    Owns the MongoDB client and the process-wide ConnectionState.

    A failed initial connection is logged and leaves the state at ERROR; the
    process keeps serving. The client stays open after such a failure, so the
    state moves to CONNECTED if the server becomes reachable later.
    """

    def __init__(
        self,
        uri: str | None,
        *,
        database_name: str = "collegeconnect",
        server_selection_timeout_ms: int = 30000,
        socket_timeout_ms: int = 45000,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ):
        self._uri = uri
        self._database_name = database_name
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._socket_timeout_ms = socket_timeout_ms
        self._client_factory = client_factory
        self._client = None
        self._database = None
        self._state = ConnectionState.CONNECTING

    @classmethod
    def from_settings(cls, settings) -> "DatabaseConnector":
        """Build a connector from application settings."""
        return cls(
            settings.MONGO_URI,
            database_name=settings.MONGO_DB_NAME,
            server_selection_timeout_ms=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            socket_timeout_ms=settings.MONGO_SOCKET_TIMEOUT_MS,
        )

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    @property
    def database(self):
        """
        The motor database handle.

        Raises:
            DatabaseUnavailableError: If the connection is not established
        """
        if not self.is_connected or self._database is None:
            raise DatabaseUnavailableError(self._state.value)
        return self._database

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> ConnectionState:
        """
        Open the client and verify it with a ping.

        Returns:
            ConnectionState: The state after the attempt
        """
        if not self._uri:
            logger.error("MongoDB connection error: MONGO_URI is not set")
            self._set_state(ConnectionState.ERROR)
            return self._state

        self._set_state(ConnectionState.CONNECTING)

        try:
            self._client = self._client_factory(
                self._uri,
                serverSelectionTimeoutMS=self._server_selection_timeout_ms,
                socketTimeoutMS=self._socket_timeout_ms,
                event_listeners=[_TopologyListener(self)],
            )
            self._database = self._client.get_default_database(default=self._database_name)
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB connection error: {e}")
            self._set_state(ConnectionState.ERROR)
            return self._state

        self._set_state(ConnectionState.CONNECTED)
        logger.info(f"MongoDB connected (database: {self._database.name})")
        return self._state

    def close(self) -> None:
        """Close the client. Safe to call when never connected."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._database = None
        self._set_state(ConnectionState.DISCONNECTED)

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def _set_state(self, state: ConnectionState) -> None:
        if state is self._state:
            return
        previous, self._state = self._state, state
        logger.info(f"MongoDB state: {previous.value} -> {state.value}")

    def _on_topology_changed(self, writable: bool) -> None:
        if writable:
            if self._database is not None:
                self._set_state(ConnectionState.CONNECTED)
        elif self._state is ConnectionState.CONNECTED:
            logger.warning("MongoDB disconnected")
            self._set_state(ConnectionState.DISCONNECTED)

    def _on_topology_closed(self) -> None:
        if self._state is not ConnectionState.ERROR:
            self._set_state(ConnectionState.DISCONNECTED)
