# =============================================================================
# collegeconnect/utils.py - Shared Utilities
# =============================================================================

from datetime import datetime, timezone


def utc_timestamp() -> str:
    """
    Current UTC time as ISO-8601 with millisecond precision.

    Example: "2024-01-15T10:30:00.123Z"
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
