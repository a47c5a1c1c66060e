# =============================================================================
# collegeconnect/routing.py - Route Table
# =============================================================================
# The REST route groups as one ordered table. Groups are included in table
# order, so on overlapping prefixes the earlier group is consulted first.
#
# "users" and "follow" share /api/users. The follow group is a second,
# lower-priority handler set for that prefix; mount_route_table() refuses to
# start if it declares a method + path shape the users group already serves.
# =============================================================================

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from fastapi import APIRouter, FastAPI

from collegeconnect.exceptions import RouteConflictError
from collegeconnect.routers import (
    achievements,
    announcements,
    auth,
    event_recommendations,
    events,
    follows,
    jobs,
    messages,
    posts,
    profiles,
    users,
)

logger = logging.getLogger(__name__)

_PATH_PARAM = re.compile(r"\{[^}]*\}")


@dataclass(frozen=True)
class RouteMount:
    """One route group mounted under a URL prefix."""
    name: str
    prefix: str
    router: APIRouter
    index_path: str | None = None

    @property
    def display_path(self) -> str:
        """Path shown for this group on the root index."""
        return self.index_path or self.prefix


DEFAULT_ROUTE_TABLE: tuple[RouteMount, ...] = (
    RouteMount("auth", "/api/auth", auth.router),
    RouteMount("profiles", "/api/profiles", profiles.router),
    RouteMount("announcements", "/api/announcements", announcements.router),
    RouteMount("achievements", "/api/achievements", achievements.router),
    RouteMount("events", "/api/events", events.router),
    RouteMount("posts", "/api/posts", posts.router),
    RouteMount("messages", "/api/messages", messages.router),
    RouteMount("users", "/api/users", users.router),
    RouteMount("jobs", "/api/jobs", jobs.router),
    RouteMount("event_recommendations", "/api/event-recommendations", event_recommendations.router),
    RouteMount("follow", "/api/users", follows.router, index_path="/api/users/follow"),
)


def path_shape(path: str) -> str:
    """
    Normalize path parameters so differently named params compare equal.

    Example: "/api/users/{user_id}" -> "/api/users/{}"
    """
    return _PATH_PARAM.sub("{}", path)


def route_signatures(mount: RouteMount) -> Iterable[tuple[str, str]]:
    """Yield (method, shape) for every route in a mounted group."""
    for route in mount.router.routes:
        methods = getattr(route, "methods", None) or {"WEBSOCKET"}
        shape = path_shape(mount.prefix + route.path)
        for method in sorted(methods):
            yield method, shape


def check_route_conflicts(table: Sequence[RouteMount]) -> None:
    """
    Verify no two groups declare the same method and path shape.

    Raises:
        RouteConflictError: On the first duplicate found, in table order
    """
    owners: dict[tuple[str, str], str] = {}
    for mount in table:
        for signature in route_signatures(mount):
            owner = owners.get(signature)
            if owner is not None and owner != mount.name:
                raise RouteConflictError(signature[0], signature[1], owner, mount.name)
            owners[signature] = mount.name


def mount_route_table(app: FastAPI, table: Sequence[RouteMount]) -> None:
    """Check the table, then include every group in order."""
    check_route_conflicts(table)

    for mount in table:
        app.include_router(mount.router, prefix=mount.prefix, tags=[mount.name])
        logger.debug(f"Mounted route group '{mount.name}' at {mount.prefix}")

    logger.info(f"Mounted {len(table)} route groups")


def build_route_index(table: Sequence[RouteMount]) -> dict[str, str]:
    """Group name -> path, in table order, for the root endpoint."""
    return {mount.name: mount.display_path for mount in table}
