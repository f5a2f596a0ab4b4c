from datetime import datetime
from schoolquiz.config import settings
from typing import Optional
import pytz

def get_local_time(timezone: Optional[str] = None):
    """Get current time in the given or configured timezone"""
    tz = pytz.timezone(timezone or settings.timezone)
    return datetime.now(tz)

def timestamp(timezone: Optional[str] = None):
    """Current time as an ISO-8601 string for storage"""
    return get_local_time(timezone).isoformat()
