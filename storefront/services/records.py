"""Helpers shared by the services for building persisted records."""

import uuid
from datetime import datetime, timezone


def new_record_id() -> str:
    """Return a fresh, collision-free record id."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
