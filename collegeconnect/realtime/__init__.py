# =============================================================================
# collegeconnect/realtime/ - Realtime Presence Channel
# =============================================================================
# Socket.IO rooms keyed by user id.
#
# Usage:
#   from collegeconnect.realtime import PresenceChannel
#
#   presence = PresenceChannel(cors_allowed_origins="*")
#   asgi_app = presence.asgi_app(fastapi_app)
#   await presence.emit_to_room(user_id, "newMessage", {...})
# =============================================================================

from collegeconnect.realtime.channel import PresenceChannel
from collegeconnect.realtime.registry import RoomRegistry

__all__ = [
    "PresenceChannel",
    "RoomRegistry",
]
