import datetime as dt
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def parse_timestamp(value: Any) -> Optional[dt.datetime]:
    """Parse a backend timestamp into an aware datetime.

    Accepts ISO 8601 strings (with 'Z' or an offset), datetimes and dates.
    Naive values are taken as UTC. Returns None for anything unparsable.
    """
    if value is None or value == '':
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def to_local(value: Any, tz: Optional[dt.tzinfo] = None) -> Optional[dt.datetime]:
    """Parse and convert to `tz`, or to the system local zone when tz is None."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.astimezone(tz)


def format_date(value: Any, with_time: bool = False) -> str:
    local = to_local(value)
    if local is None:
        return 'N/A'
    return local.strftime('%Y-%m-%d %H:%M' if with_time else '%Y-%m-%d')


def resolve_timezone(name: Optional[str]) -> Optional[dt.tzinfo]:
    """IANA zone for `name` (as reported by the browser), or None if unknown."""
    if not isinstance(name, str) or not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None
