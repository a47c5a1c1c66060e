# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up the environment before any collegeconnect imports
# - In-memory fake of the motor collection API used by the route groups
# - Connector fake with a settable ConnectionState
# - App factory fixture building isolated apps per test
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# collegeconnect.config builds settings at import time

os.environ.pop("MONGO_URI", None)
os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from fastapi import APIRouter, Body, Request
from fastapi.testclient import TestClient

from collegeconnect.config import Settings
from collegeconnect.database import ConnectionState, DatabaseConnector
from collegeconnect.main import create_app
from collegeconnect.routing import DEFAULT_ROUTE_TABLE, RouteMount


# =============================================================================
# Fake MongoDB
# =============================================================================

def _matches(document: dict, query: dict) -> bool:
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, sub) for sub in condition):
                return False
            continue
        value = document.get(key)
        if isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


def _project(document: dict, projection: dict | None) -> dict:
    if not projection:
        return dict(document)
    if all(not flag for flag in projection.values()):
        return {k: v for k, v in document.items() if k not in projection}
    keep = {k for k, flag in projection.items() if flag} | {"_id"}
    return {k: v for k, v in document.items() if k in keep}


class FakeCursor:
    """Chainable stand-in for a motor cursor."""

    def __init__(self, documents: list[dict]):
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents = sorted(self._documents, key=lambda d: d[key], reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._documents = self._documents[count:]
        return self

    def limit(self, count: int) -> "FakeCursor":
        if count:
            self._documents = self._documents[:count]
        return self

    async def to_list(self, length: int | None = None) -> list[dict]:
        return list(self._documents[:length] if length else self._documents)


class FakeCollection:
    def __init__(self, documents: list[dict] | None = None):
        self.documents = list(documents or [])

    def find(self, query: dict | None = None, projection: dict | None = None) -> FakeCursor:
        query = query or {}
        return FakeCursor([_project(d, projection) for d in self.documents if _matches(d, query)])

    async def find_one(self, query: dict | None = None, projection: dict | None = None):
        for document in self.documents:
            if _matches(document, query or {}):
                return _project(document, projection)
        return None


class FakeDatabase:
    """Dict of collections, addressed like a motor database: db["users"]."""

    name = "collegeconnect-test"

    def __init__(self, collections: dict[str, list[dict]] | None = None):
        self._collections = {
            name: FakeCollection(documents) for name, documents in (collections or {}).items()
        }

    def __getitem__(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection())


class FakeConnector(DatabaseConnector):
    """Connector whose state is set by the test instead of a server."""

    def __init__(self, database=None, connected: bool = True):
        super().__init__("mongodb://fake-host/collegeconnect")
        self._database = database if database is not None else FakeDatabase()
        self._target = ConnectionState.CONNECTED if connected else ConnectionState.ERROR
        if connected:
            self._set_state(ConnectionState.CONNECTED)

    async def connect(self) -> ConnectionState:
        self._set_state(self._target)
        return self._state

    def close(self) -> None:
        self._set_state(ConnectionState.DISCONNECTED)


# =============================================================================
# Debug route group
# =============================================================================
# Extra routes mounted next to the real groups to observe the pipeline.

debug_router = APIRouter()


@debug_router.post("/echo")
async def echo_body(request: Request):
    return {"body": getattr(request.state, "body", None)}


@debug_router.post("/model")
async def echo_model(payload: dict = Body(...)):
    return payload


@debug_router.get("/ping")
async def ping():
    return {"route": True}


@debug_router.get("/boom")
async def boom():
    raise RuntimeError("kaboom")


DEBUG_ROUTE_TABLE = DEFAULT_ROUTE_TABLE + (RouteMount("debug", "/api/debug", debug_router),)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def public_dir(tmp_path):
    """Empty public directory with the upload subfolders."""
    root = tmp_path / "public"
    (root / "uploads" / "profile").mkdir(parents=True)
    (root / "uploads" / "cover").mkdir(parents=True)
    return root


@pytest.fixture
def make_settings(public_dir):
    """Build isolated Settings, ignoring any .env file."""
    def _make(**overrides) -> Settings:
        values = {"PUBLIC_DIR": public_dir, "NODE_ENV": "development"}
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_app(make_settings):
    """Build an app around a FakeConnector."""
    def _make(
        database=None,
        connected: bool = True,
        route_table=DEBUG_ROUTE_TABLE,
        connector=None,
        **settings_overrides,
    ):
        return create_app(
            make_settings(**settings_overrides),
            connector=connector or FakeConnector(database, connected=connected),
            route_table=route_table,
        )
    return _make


@pytest.fixture
def client(make_app):
    """Client for a connected app with an empty database."""
    return TestClient(make_app(), raise_server_exceptions=False)


@pytest.fixture
def ids():
    """Stable ObjectIds for seeded documents."""
    return {name: ObjectId() for name in ("ada", "grace", "linus", "post1", "post2", "post3")}


@pytest.fixture
def seeded_database(ids):
    """A small campus dataset covering every route group."""
    def at(day: int) -> datetime:
        return datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc)

    return FakeDatabase({
        "users": [
            {"_id": ids["ada"], "name": "Ada", "email": "ada@campus.edu", "password": "hash-1", "createdAt": at(1)},
            {"_id": ids["grace"], "name": "Grace", "email": "grace@campus.edu", "password": "hash-2", "createdAt": at(2)},
            {"_id": ids["linus"], "name": "Linus", "email": "linus@campus.edu", "password": "hash-3", "createdAt": at(3)},
        ],
        "profiles": [
            {"_id": ObjectId(), "user": ids["ada"], "bio": "Compilers", "createdAt": at(1)},
        ],
        "posts": [
            {"_id": ids["post1"], "user": ids["ada"], "text": "first", "createdAt": at(1)},
            {"_id": ids["post2"], "user": ids["grace"], "text": "second", "createdAt": at(2)},
            {"_id": ids["post3"], "user": ids["ada"], "text": "third", "createdAt": at(3)},
        ],
        "follows": [
            {"_id": ObjectId(), "follower": ids["grace"], "following": ids["ada"], "createdAt": at(4)},
            {"_id": ObjectId(), "follower": ids["linus"], "following": ids["ada"], "createdAt": at(5)},
            {"_id": ObjectId(), "follower": ids["ada"], "following": ids["grace"], "createdAt": at(6)},
        ],
        "messages": [
            {"_id": ObjectId(), "sender": ids["ada"], "receiver": ids["grace"], "text": "hi", "createdAt": at(7)},
            {"_id": ObjectId(), "sender": ids["grace"], "receiver": ids["ada"], "text": "hello", "createdAt": at(8)},
            {"_id": ObjectId(), "sender": ids["linus"], "receiver": ids["ada"], "text": "ping", "createdAt": at(9)},
        ],
        "events": [
            {"_id": ObjectId(), "title": "Hackathon", "date": at(20)},
            {"_id": ObjectId(), "title": "Career fair", "date": at(10)},
        ],
        "eventrecommendations": [
            {"_id": ObjectId(), "user": str(ids["ada"]), "event": "Hackathon", "score": 0.4},
            {"_id": ObjectId(), "user": str(ids["ada"]), "event": "Career fair", "score": 0.9},
        ],
        "jobs": [
            {"_id": ObjectId(), "title": "Intern", "createdAt": at(11)},
        ],
        "announcements": [],
        "achievements": [
            {"_id": ObjectId(), "user": ids["grace"], "title": "Dean's list", "createdAt": at(12)},
        ],
    })
