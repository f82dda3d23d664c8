"""
This service module contains the data logic for the landing dashboard:
per-table totals, the recent-users panel, chart distributions and CSV export,
keeping the view layer focused on rendering.
"""
import csv
import io
import logging
from typing import Any, Dict, Iterable, List

from domain.constants import DASHBOARD_TABLES
from services.backend import Backend
from services.remote import CollectionClient

logger = logging.getLogger(__name__)


def fetch_table_counts(backend: Backend, tables: Iterable[str] = DASHBOARD_TABLES) -> Dict[str, int]:
    """One exact-count round trip per table, sequentially.

    Raises RemoteError on the first failing table.
    """
    counts = {}
    for table in tables:
        counts[table] = CollectionClient(backend, table).count()
    logger.debug("Table counts: %s", counts)
    return counts


def recent_users(backend: Backend, limit: int = 5) -> List[Dict[str, Any]]:
    return CollectionClient(backend, 'users').recent(limit=limit)


def engagement_distribution(counts: Dict[str, int]) -> List[Dict[str, Any]]:
    return [
        {"name": "Messages", "value": counts.get('messages') or 0},
        {"name": "Likes", "value": counts.get('likes') or 0},
        {"name": "Comments", "value": counts.get('comments') or 0},
        {"name": "Favorites", "value": counts.get('user_favs') or 0},
    ]


def content_distribution(counts: Dict[str, int]) -> List[Dict[str, Any]]:
    return [
        {"name": "Profiles", "value": counts.get('profiles') or 0},
        {"name": "Reels", "value": counts.get('reels') or 0},
        {"name": "Searches", "value": counts.get('search_profiles') or 0},
    ]


def export_to_csv(rows: List[Dict[str, Any]]) -> str:
    """Exports rows to a CSV string (header = sorted union of keys)."""
    if not rows:
        return ""

    output = io.StringIO()
    fieldnames = sorted({key for item in rows for key in item.keys()})
    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()
    writer.writerows(rows)
    return output.getvalue()
