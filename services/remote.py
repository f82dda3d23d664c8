"""
Remote Collection Client: row-level operations against one backend table.

Each method is one round trip. The remote side is authoritative, so nothing
here pre-checks existence; callers get RemoteError for transport or query
failures and ValidationError for input rejected before any call is made.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from domain.errors import RemoteError, ValidationError
from services.backend import Backend, read_json

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(fields: Dict[str, Any], required: Iterable[str]) -> List[str]:
    return [name for name in required if is_blank(fields.get(name))]


def parse_content_range(header: Optional[str]) -> int:
    """Total from a PostgREST Content-Range header such as ``0-24/3573`` or ``*/0``."""
    if not header or '/' not in header:
        raise RemoteError("Backend did not report a row count")
    total = header.rsplit('/', 1)[1].strip()
    if not total.isdigit():
        raise RemoteError(f"Backend reported an unknown row count: {header}")
    return int(total)


class CollectionClient:
    def __init__(self, backend: Backend, name: str, select: str = '*'):
        self.backend = backend
        self.name = name
        self.select = select

    def __repr__(self):
        return f"CollectionClient({self.name!r})"

    def list(self, order_by: Optional[str] = 'created_at', ascending: bool = False) -> List[Row]:
        params = {'select': self.select}
        if order_by:
            params['order'] = f"{order_by}.{'asc' if ascending else 'desc'}"
        data = read_json(self.backend.rest('GET', self.name, params=params))
        rows = data if isinstance(data, list) else []
        logger.debug("Fetched %d rows from %s", len(rows), self.name)
        return rows

    def recent(self, limit: int = 5, order_by: str = 'created_at') -> List[Row]:
        params = {'select': self.select, 'order': f'{order_by}.desc', 'limit': limit}
        data = read_json(self.backend.rest('GET', self.name, params=params))
        return data if isinstance(data, list) else []

    def count(self) -> int:
        response = self.backend.rest(
            'HEAD', self.name, params={'select': '*'}, headers={'Prefer': 'count=exact'})
        return parse_content_range(response.headers.get('Content-Range'))

    def insert(self, fields: Dict[str, Any], required: Iterable[str] = ()) -> Row:
        missing = missing_fields(fields, required)
        if missing:
            raise ValidationError(
                f"Please fill in {' and '.join(f.capitalize() for f in missing)}!", missing)
        data = read_json(self.backend.rest(
            'POST', self.name, json=[fields], headers={'Prefer': 'return=representation'}))
        if not data:
            raise RemoteError(f"Insert into {self.name} returned no row")
        row = data[0]
        logger.info("Inserted row %s into %s", row.get('id'), self.name)
        return row

    def update_by_id(self, row_id: Any, patch: Dict[str, Any]) -> Row:
        data = read_json(self.backend.rest(
            'PATCH', self.name, params={'id': f'eq.{row_id}'}, json=patch,
            headers={'Prefer': 'return=representation'}))
        if not data:
            raise RemoteError(f"No {self.name} row with id {row_id}", status=404)
        logger.info("Updated %s row %s", self.name, row_id)
        return data[0]

    def delete_by_id(self, row_id: Any) -> None:
        # A row that is already gone deletes nothing and still succeeds
        self.backend.rest('DELETE', self.name, params={'id': f'eq.{row_id}'})
        logger.info("Deleted %s row %s", self.name, row_id)

    def find_one(self, column: str, value: Any) -> Optional[Row]:
        params = {'select': '*', column: f'eq.{value}', 'limit': 1}
        data = read_json(self.backend.rest('GET', self.name, params=params))
        if isinstance(data, list) and data:
            return data[0]
        return None
