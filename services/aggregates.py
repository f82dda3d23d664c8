"""
Pure derivations over already-fetched rows, used by the dashboard and the
likes analytics page. Nothing here talks to the backend.
"""
import datetime as dt
from typing import Any, Dict, Iterable, List, Optional

from domain.constants import WEEKDAY_LABELS, WEEKDAY_NAMES
from utils.timefmt import to_local


def weekday_index(value: Any, tz: Optional[dt.tzinfo] = None) -> Optional[int]:
    """0-6 weekday with Sunday=0, in `tz` (system local zone if None)."""
    local = to_local(value, tz)
    if local is None:
        return None
    return (local.weekday() + 1) % 7


def weekday_histogram(rows: Iterable[Dict[str, Any]], tz: Optional[dt.tzinfo] = None,
                      field: str = 'created_at') -> List[int]:
    """Seven buckets in display order (Sunday first), zeros included."""
    buckets = [0] * 7
    for row in rows:
        idx = weekday_index(row.get(field), tz)
        if idx is not None:
            buckets[idx] += 1
    return buckets


def percentages(histogram: List[int]) -> List[float]:
    total = sum(histogram)
    if not total:
        return [0.0] * len(histogram)
    return [round(count * 100.0 / total, 1) for count in histogram]


def peak_day(histogram: List[int], full_name: bool = False) -> Optional[str]:
    if not histogram or max(histogram) == 0:
        return None
    idx = histogram.index(max(histogram))
    return (WEEKDAY_NAMES if full_name else WEEKDAY_LABELS)[idx]


def active_days(histogram: List[int]) -> int:
    return sum(1 for count in histogram if count > 0)


def weekday_chart_data(histogram: List[int]) -> List[Dict[str, Any]]:
    pcts = percentages(histogram)
    return [{"day": WEEKDAY_LABELS[i], "count": histogram[i], "percent": pcts[i]}
            for i in range(7)]


def count_today(rows: Iterable[Dict[str, Any]], now: Optional[dt.datetime] = None,
                tz: Optional[dt.tzinfo] = None, field: str = 'created_at') -> int:
    """Rows whose local calendar day equals today's."""
    now = (now or dt.datetime.now(dt.timezone.utc)).astimezone(tz)
    today = now.date()
    total = 0
    for row in rows:
        local = to_local(row.get(field), tz)
        if local is not None and local.date() == today:
            total += 1
    return total


def count_this_week(rows: Iterable[Dict[str, Any]], now: Optional[dt.datetime] = None,
                    tz: Optional[dt.tzinfo] = None, field: str = 'created_at') -> int:
    """Rows within the rolling seven days ending now, both ends inclusive."""
    now = (now or dt.datetime.now(dt.timezone.utc)).astimezone(tz)
    start = now - dt.timedelta(days=7)
    total = 0
    for row in rows:
        local = to_local(row.get(field), tz)
        if local is not None and start <= local <= now:
            total += 1
    return total
