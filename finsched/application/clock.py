"""
The one place that reads the wall clock.

Callers sample `current_time()` once per render/query and pass the value to
the calculators; the calculators never read the clock themselves.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

from finsched.config import Settings, get_settings


def current_time(settings: Settings | None = None) -> datetime:
    """Aware 'now' in the configured TIMEZONE."""
    settings = settings or get_settings()
    return datetime.now(tz=ZoneInfo(settings.TIMEZONE))
