# =============================================================================
# collegeconnect/realtime/channel.py - Socket.IO Presence Channel
# =============================================================================
# Clients connect over Socket.IO and emit "join" with a room identifier
# (their user id) to receive events targeted at that room.
#
# Per connection: connected -> join(room)* -> disconnected. There is no
# leave event and no acknowledgement.
#
# Note: join is not authenticated. Any connection can claim any room
# identifier, including another user's id.
# =============================================================================

import logging
from typing import Any

import socketio

from collegeconnect.realtime.registry import RoomRegistry

logger = logging.getLogger(__name__)


class PresenceChannel:
    """
    Socket.IO server plus the room registry it maintains.

    The registry is the single owner of membership state; the Socket.IO
    manager's own rooms are kept in step for delivery.
    """

    def __init__(
        self,
        sio: socketio.AsyncServer | None = None,
        registry: RoomRegistry | None = None,
        *,
        cors_allowed_origins: str | list[str] = "*",
    ):
        self.sio = sio or socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=cors_allowed_origins,
        )
        self.registry = registry or RoomRegistry()

        self.sio.on("connect", handler=self.on_connect)
        self.sio.on("join", handler=self.on_join)
        self.sio.on("disconnect", handler=self.on_disconnect)

    # -------------------------------------------------------------------------
    # Event handlers
    # -------------------------------------------------------------------------

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        self.registry.register(sid)
        logger.info(
            f"Realtime client connected: {sid}. "
            f"Total connections: {self.registry.get_connection_count()}"
        )

    async def on_join(self, sid: str, room: Any = None) -> None:
        """Put the connection in the room named by the payload."""
        if room is None or str(room) == "":
            logger.warning(f"Realtime client {sid} sent join without a room id, ignoring")
            return

        room = str(room)
        await self.sio.enter_room(sid, room)
        if self.registry.join(sid, room):
            logger.info(f"User {room} joined their room (sid {sid})")

    async def on_disconnect(self, sid: str, *args: Any) -> None:
        # python-socketio >= 5.12 passes a disconnect reason
        rooms = self.registry.drop(sid)
        logger.info(
            f"Realtime client disconnected: {sid}, left {len(rooms)} room(s). "
            f"Total connections: {self.registry.get_connection_count()}"
        )

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    async def emit_to_room(self, room: str, event: str, data: Any = None) -> int:
        """
        Send an event to every connection in a room.

        Delivery is left to the Socket.IO manager, which also reaches rooms
        entered directly on the server.

        Returns:
            int: Number of members the registry lists for the room
        """
        members = self.registry.get_connection_count(room)
        await self.sio.emit(event, data, room=room)
        logger.debug(f"Emitted {event} to room {room} ({members} connection(s))")
        return members

    def asgi_app(self, other_asgi_app) -> socketio.ASGIApp:
        """Serve Socket.IO at /socket.io/ and hand everything else to other_asgi_app."""
        return socketio.ASGIApp(self.sio, other_asgi_app=other_asgi_app)
