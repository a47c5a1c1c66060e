# =============================================================================
# collegeconnect/realtime/registry.py - Room Membership Registry
# =============================================================================
# In-memory room identifier -> connection ids, plus the reverse mapping so a
# disconnect can drop every membership of a connection in one call.
#
# Usage:
#   registry = RoomRegistry()
#   registry.register(sid)
#   registry.join(sid, "user-42")
#   registry.members("user-42")     # frozenset({sid})
#   registry.drop(sid)              # on disconnect
# =============================================================================

import logging
from typing import Dict, Set

logger = logging.getLogger(__name__)


class RoomRegistry:
    """
    Tracks which connections are in which rooms.

    A connection may be in any number of rooms. Rooms are created on first
    join and removed when their last member leaves. There is no capacity
    bound.
    """

    def __init__(self):
        # room -> set of sids
        self._rooms: Dict[str, Set[str]] = {}
        # sid -> set of rooms (empty set for connected, not yet joined)
        self._connections: Dict[str, Set[str]] = {}

    def register(self, sid: str) -> None:
        """Record a new connection with no rooms."""
        self._connections.setdefault(sid, set())

    def join(self, sid: str, room: str) -> bool:
        """
        Add a connection to a room.

        Returns:
            bool: False if the connection was already a member
        """
        rooms = self._connections.setdefault(sid, set())
        if room in rooms:
            return False
        rooms.add(room)
        self._rooms.setdefault(room, set()).add(sid)
        return True

    def drop(self, sid: str) -> Set[str]:
        """
        Forget a connection and all of its memberships.

        Returns:
            set[str]: The rooms the connection was in
        """
        rooms = self._connections.pop(sid, set())
        for room in rooms:
            members = self._rooms.get(room)
            if members is None:
                continue
            members.discard(sid)
            if not members:
                del self._rooms[room]
        return rooms

    def members(self, room: str) -> frozenset:
        return frozenset(self._rooms.get(room, ()))

    def rooms_for(self, sid: str) -> frozenset:
        return frozenset(self._connections.get(sid, ()))

    def is_connected(self, sid: str) -> bool:
        return sid in self._connections

    def get_connection_count(self, room: str | None = None) -> int:
        """
        Get the number of active connections.

        Args:
            room: If provided, count members of that room. Otherwise total.
        """
        if room is not None:
            return len(self._rooms.get(room, ()))
        return len(self._connections)

    def get_active_rooms(self) -> list[str]:
        """Room identifiers with at least one member."""
        return list(self._rooms.keys())
