# =============================================================================
# collegeconnect/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - status.py: root index, /api/test and /health
# - auth.py, profiles.py, announcements.py, achievements.py, events.py,
#   posts.py, messages.py, users.py, jobs.py, event_recommendations.py,
#   follows.py: one route group each
# - common.py: pagination, id parsing and serialization helpers
#
# Route groups are mounted with their URL prefix by collegeconnect/routing.py.
# =============================================================================

from . import achievements
from . import announcements
from . import auth
from . import event_recommendations
from . import events
from . import follows
from . import jobs
from . import messages
from . import posts
from . import profiles
from . import status
from . import users

__all__ = [
    "achievements",
    "announcements",
    "auth",
    "event_recommendations",
    "events",
    "follows",
    "jobs",
    "messages",
    "posts",
    "profiles",
    "status",
    "users",
]
