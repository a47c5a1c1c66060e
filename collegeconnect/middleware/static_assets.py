# =============================================================================
# collegeconnect/middleware/static_assets.py - Fall-Through Static Files
# =============================================================================
# Serves files from an ordered list of mount points before routing.
#
# Unlike app.mount("/x", StaticFiles(...)), a miss is not a 404: the request
# continues to the next mount and finally to the routes. Mounts are tried in
# declaration order and every matching prefix is tried, so "/uploads/profile/a.png"
# may be served by "/", "/uploads" or "/uploads/profile".
# =============================================================================

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaticMount:
    """A URL prefix served from a directory."""
    prefix: str
    directory: Path

    def relative_path(self, path: str) -> str | None:
        """
        Path below this mount, or None if the prefix does not match.

        Example: StaticMount("/uploads", ...).relative_path("/uploads/a.png") -> "a.png"
        """
        prefix = self.prefix.rstrip("/")
        if prefix and path != prefix and not path.startswith(prefix + "/"):
            return None
        remainder = path[len(prefix):].lstrip("/")
        return os.path.normpath(os.path.join(".", *remainder.split("/")))


class StaticAssetMiddleware:
    """Pure ASGI static file server that falls through on a miss."""

    def __init__(self, app: ASGIApp, mounts: Sequence[StaticMount] = ()) -> None:
        self.app = app
        self.mounts = list(mounts)
        # html=False: a directory is never answered with its index.html
        self._files = [
            StaticFiles(directory=mount.directory, check_dir=False)
            for mount in self.mounts
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] in ("GET", "HEAD"):
            for mount, files in zip(self.mounts, self._files):
                relative = mount.relative_path(scope["path"])
                if relative is None:
                    continue
                try:
                    response = await files.get_response(relative, scope)
                except HTTPException:
                    continue
                logger.debug(f"Static hit: {scope['path']} from {mount.directory}")
                await response(scope, receive, send)
                return

        await self.app(scope, receive, send)
