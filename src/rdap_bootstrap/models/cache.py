from __future__ import annotations

from enum import StrEnum


class FileState(StrEnum):
    """Freshness of one cached registry file, as seen by one cache instance."""

    # Not in the cache.
    ABSENT = "absent"

    # In the cache, and this instance has already loaded or saved the latest version.
    GOOD = "good"

    # In the cache and within the timeout, but a newer version than the one this
    # instance last loaded is available (written by another process).
    SHOULD_RELOAD = "should_reload"

    # In the cache, but older than the timeout.
    EXPIRED = "expired"
