"""
List-View Controller: the per-page state machine behind every table view.

The controller owns the fetched rows. Views read `visible_rows` / `rows`
(copies) and change state only through the load, filter, sort and mutation
methods below. Remote mutations are mirrored locally only after the backend
confirms them.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from domain.errors import DashboardError, RemoteError, ValidationError
from domain.models import CollectionSpec, ViewStatus
from services.remote import CollectionClient, is_blank, missing_fields
from utils.timefmt import parse_timestamp

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def filter_rows(rows: Iterable[Row], query: str, fields: Sequence[str]) -> List[Row]:
    """Case-insensitive substring match of `query` against any of `fields`."""
    rows = list(rows)
    needle = (query or '').strip().lower()
    if not needle:
        return rows
    matched = []
    for row in rows:
        for name in fields:
            value = row.get(name)
            if value is not None and needle in str(value).lower():
                matched.append(row)
                break
    return matched


def _sort_key(field: str, value: Any):
    if field.endswith('_at'):
        ts = parse_timestamp(value)
        if ts is not None:
            return (0, ts.timestamp())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value).lower())


def sort_rows(rows: Iterable[Row], field: str, ascending: bool = True) -> List[Row]:
    """Stable sort on `field`; rows lacking it keep fetch order at the end."""
    present, absent = [], []
    for row in rows:
        (absent if row.get(field) in (None, '') else present).append(row)
    ordered = sorted(present, key=lambda r: _sort_key(field, r[field]), reverse=not ascending)
    return ordered + absent


class ListViewController:
    def __init__(self, client: CollectionClient, spec: CollectionSpec):
        self.client = client
        self.spec = spec
        self.status = ViewStatus.IDLE
        self.error: Optional[str] = None
        self.action_error: Optional[DashboardError] = None
        self.notice: Optional[str] = None
        self.query = ''
        self.sort_field = spec.order_by
        self.ascending = spec.ascending
        self.pending_delete: Optional[Row] = None
        self.editing_id: Any = None
        self.pending_ids: Set[Any] = set()
        self.form_version = 0
        self._rows: List[Row] = []

    # -- state -----------------------------------------------------------
    @property
    def rows(self):
        return tuple(dict(r) for r in self._rows)

    @property
    def total(self) -> int:
        return len(self._rows)

    @property
    def is_loading(self) -> bool:
        return self.status == ViewStatus.LOADING

    @property
    def is_empty(self) -> bool:
        return self.status == ViewStatus.LOADED and not self._rows

    @property
    def visible_rows(self) -> List[Row]:
        filtered = filter_rows(self._rows, self.query, self.spec.search_fields)
        return [dict(r) for r in sort_rows(filtered, self.sort_field, self.ascending)]

    def ensure_loaded(self):
        """Auto-load on first mount."""
        if self.status == ViewStatus.IDLE:
            self.load()

    def load(self) -> bool:
        # Current rows stay in place until the new fetch succeeds
        self.status = ViewStatus.LOADING
        self.error = None
        try:
            fetched = self.client.list(self.spec.order_by, self.spec.ascending)
        except RemoteError as e:
            logger.error("Loading %s failed: %s", self.spec.name, e)
            self.status = ViewStatus.ERRORED
            self.error = f"Failed to fetch {self.spec.name}: {e}"
            return False
        self._rows = [dict(r) for r in fetched or []]
        self.status = ViewStatus.LOADED
        return True

    def refresh(self) -> bool:
        return self.load()

    def retry(self) -> bool:
        return self.load()

    def set_query(self, query: str):
        self.query = query or ''

    def toggle_sort(self):
        self.ascending = not self.ascending

    def pop_notice(self) -> Optional[str]:
        notice, self.notice = self.notice, None
        return notice

    def _find(self, row_id: Any) -> Optional[Row]:
        return next((r for r in self._rows if r.get('id') == row_id), None)

    def _remove_by_id(self, row_id: Any) -> int:
        before = len(self._rows)
        self._rows = [r for r in self._rows if r.get('id') != row_id]
        return before - len(self._rows)

    # -- delete ----------------------------------------------------------
    def request_delete(self, row: Row):
        """Stage a deletion; nothing is sent until `confirm_delete`."""
        self.pending_delete = dict(row)
        self.action_error = None

    def cancel_delete(self):
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        row = self.pending_delete
        self.pending_delete = None
        if row is None:
            return False
        row_id = row.get('id')
        self.pending_ids.add(row_id)
        try:
            self.client.delete_by_id(row_id)
        except RemoteError as e:
            self.action_error = RemoteError(f"Failed to delete {self.spec.noun}: {e}",
                                            status=e.status, code=e.code)
            return False
        finally:
            self.pending_ids.discard(row_id)
        removed = self._remove_by_id(row_id)
        if not removed:
            logger.info("%s %s was already gone locally", self.spec.noun, row_id)
        self.notice = f"{self.spec.noun.capitalize()} deleted successfully!"
        return True

    # -- edit ------------------------------------------------------------
    def start_edit(self, row: Row):
        self.editing_id = row.get('id')
        self.action_error = None

    def cancel_edit(self):
        self.editing_id = None
        self.action_error = None

    def request_update(self, row: Row, patch: Dict[str, Any]) -> bool:
        patch = {k: v.strip() if isinstance(v, str) else v for k, v in patch.items()}
        primary = self.spec.editable_field
        if primary and is_blank(patch.get(primary)):
            self.action_error = ValidationError(
                f"{self.spec.noun.capitalize()} cannot be empty!", [primary])
            return False
        row_id = row.get('id')
        self.pending_ids.add(row_id)
        try:
            updated = self.client.update_by_id(row_id, patch)
        except RemoteError as e:
            self.action_error = RemoteError(f"Failed to update {self.spec.noun}: {e}",
                                            status=e.status, code=e.code)
            return False
        finally:
            self.pending_ids.discard(row_id)
        local = self._find(row_id)
        if local is not None:
            local.update(patch)
            local.update(updated or {})
        self.editing_id = None
        self.action_error = None
        self.notice = f"{self.spec.noun.capitalize()} updated successfully!"
        return True

    # -- insert ----------------------------------------------------------
    def request_insert(self, fields: Dict[str, Any]) -> bool:
        missing = missing_fields(fields, self.spec.required_fields)
        if missing:
            self.action_error = ValidationError(
                f"Please fill in {' and '.join(f.capitalize() for f in missing)}!", missing)
            return False
        try:
            created = self.client.insert(fields, required=self.spec.required_fields)
        except (RemoteError, ValidationError) as e:
            if isinstance(e, RemoteError):
                e = RemoteError(f"Failed to add {self.spec.noun}: {e}", status=e.status, code=e.code)
            self.action_error = e
            return False
        self._rows.insert(0, dict(created))
        self.form_version += 1
        self.action_error = None
        self.notice = f"{self.spec.noun.capitalize()} added successfully!"
        return True
