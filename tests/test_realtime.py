# =============================================================================
# tests/test_realtime.py - Presence Channel Tests
# =============================================================================
# Tests for the room registry and the Socket.IO event handlers.
# The Socket.IO server is mocked; handlers are driven with asyncio.run.
# =============================================================================

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import socketio

from collegeconnect.realtime import PresenceChannel, RoomRegistry


@pytest.fixture
def sio():
    server = MagicMock()
    server.enter_room = AsyncMock()
    server.emit = AsyncMock()
    return server


@pytest.fixture
def channel(sio):
    return PresenceChannel(sio=sio)


# =============================================================================
# RoomRegistry
# =============================================================================

class TestRoomRegistry:
    """Test membership bookkeeping."""

    def test_two_connections_same_room(self):
        registry = RoomRegistry()

        registry.join("sid-a", "user-1")
        registry.join("sid-b", "user-1")

        assert registry.members("user-1") == frozenset({"sid-a", "sid-b"})

    def test_connection_in_several_rooms(self):
        registry = RoomRegistry()

        registry.join("sid-a", "user-1")
        registry.join("sid-a", "user-2")

        assert registry.rooms_for("sid-a") == frozenset({"user-1", "user-2"})

    def test_duplicate_join(self):
        registry = RoomRegistry()

        assert registry.join("sid-a", "user-1") is True
        assert registry.join("sid-a", "user-1") is False
        assert registry.get_connection_count("user-1") == 1

    def test_drop_removes_every_membership(self):
        registry = RoomRegistry()
        registry.join("sid-a", "user-1")
        registry.join("sid-a", "user-2")
        registry.join("sid-b", "user-1")

        left = registry.drop("sid-a")

        assert left == {"user-1", "user-2"}
        assert registry.members("user-1") == frozenset({"sid-b"})
        assert registry.get_active_rooms() == ["user-1"]
        assert not registry.is_connected("sid-a")

    def test_drop_unknown_connection(self):
        assert RoomRegistry().drop("nobody") == set()

    def test_connection_counts(self):
        registry = RoomRegistry()
        registry.register("sid-a")
        registry.join("sid-b", "user-1")

        assert registry.get_connection_count() == 2
        assert registry.get_connection_count("user-1") == 1
        assert registry.get_connection_count("user-9") == 0


# =============================================================================
# PresenceChannel
# =============================================================================

class TestPresenceChannel:
    """Test the connect / join / disconnect handlers."""

    def test_handlers_registered(self, sio):
        PresenceChannel(sio=sio)

        events = [c.args[0] for c in sio.on.call_args_list]
        assert events == ["connect", "join", "disconnect"]

    def test_real_server_handlers(self):
        channel = PresenceChannel()

        assert {"connect", "join", "disconnect"} <= set(channel.sio.handlers["/"])

    def test_connect_registers(self, channel):
        asyncio.run(channel.on_connect("sid-a", {}))

        assert channel.registry.is_connected("sid-a")

    def test_join_enters_room(self, channel, sio):
        asyncio.run(channel.on_join("sid-a", "user-1"))

        sio.enter_room.assert_awaited_once_with("sid-a", "user-1")
        assert channel.registry.members("user-1") == frozenset({"sid-a"})

    def test_non_string_room_coerced(self, channel, sio):
        asyncio.run(channel.on_join("sid-a", 42))

        sio.enter_room.assert_awaited_once_with("sid-a", "42")

    def test_empty_join_ignored(self, channel, sio):
        asyncio.run(channel.on_join("sid-a"))
        asyncio.run(channel.on_join("sid-a", ""))

        sio.enter_room.assert_not_awaited()
        assert channel.registry.get_active_rooms() == []

    def test_any_connection_may_claim_any_room(self, channel):
        """Join is not authenticated: a second client can join someone else's room."""
        async def scenario():
            await channel.on_join("owner", "user-1")
            await channel.on_join("stranger", "user-1")

        asyncio.run(scenario())

        assert channel.registry.members("user-1") == frozenset({"owner", "stranger"})

    def test_delivery_reaches_both_members(self, channel, sio):
        """Test a room emit targets the room both clients joined."""
        async def scenario():
            await channel.on_connect("sid-a", {})
            await channel.on_connect("sid-b", {})
            await channel.on_join("sid-a", "user-1")
            await channel.on_join("sid-b", "user-1")
            return await channel.emit_to_room("user-1", "newMessage", {"text": "hi"})

        delivered = asyncio.run(scenario())

        assert delivered == 2
        sio.emit.assert_awaited_once_with("newMessage", {"text": "hi"}, room="user-1")

    def test_disconnect_removes_membership(self, channel, sio):
        async def scenario():
            await channel.on_connect("sid-a", {})
            await channel.on_join("sid-a", "user-1")
            await channel.on_disconnect("sid-a", "client disconnect")
            return await channel.emit_to_room("user-1", "newMessage", {})

        delivered = asyncio.run(scenario())

        assert delivered == 0
        assert not channel.registry.is_connected("sid-a")

    def test_emit_to_room_unknown_to_registry(self, channel, sio):
        """Test a room the registry does not list still gets the emit."""
        delivered = asyncio.run(channel.emit_to_room("user-9", "newMessage", {"text": "hi"}))

        assert delivered == 0
        sio.emit.assert_awaited_once_with("newMessage", {"text": "hi"}, room="user-9")

    def test_disconnect_without_reason(self, channel):
        asyncio.run(channel.on_join("sid-a", "user-1"))
        asyncio.run(channel.on_disconnect("sid-a"))

        assert channel.registry.members("user-1") == frozenset()

    def test_asgi_app_wraps_http_app(self, make_app):
        app = make_app()

        wrapped = app.state.presence.asgi_app(app)

        assert isinstance(wrapped, socketio.ASGIApp)
