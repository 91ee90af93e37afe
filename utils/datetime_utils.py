from datetime import datetime, date
from typing import Optional, Union

import pytz

from config import config

def get_timezone(name: Optional[str] = None):
    return pytz.timezone(name or config.clock.timezone)

def now_local(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(get_timezone(tz_name))

def to_local(dt: datetime, tz_name: Optional[str] = None) -> datetime:
    tz = get_timezone(tz_name)
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)

def from_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)

def days_between(start: datetime, end: datetime) -> int:
    """Whole days elapsed from start to end, never negative"""
    return max(0, (to_local(end) - to_local(start)).days)

def local_day(value: Union[datetime, date]) -> date:
    if isinstance(value, datetime):
        return to_local(value).date()
    return value

def day_of_year(value: Union[datetime, date]) -> int:
    return local_day(value).timetuple().tm_yday
