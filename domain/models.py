from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Optional, Any, Tuple
import time


class ViewStatus(str, Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    LOADED = 'loaded'
    ERRORED = 'errored'


@dataclass
class Session:
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None  # unix seconds
    user_id: Optional[str] = None
    email: Optional[str] = None
    admin_verified: bool = False

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return now >= self.expires_at

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def session_from_dict(d: Dict[str, Any]) -> Optional[Session]:
    """Build a Session from stored JSON or an auth response.

    Accepts both our own serialized form and the raw token payload returned by
    the auth endpoint (which nests identity under ``user``). Returns None when
    there is no access token.
    """
    if not isinstance(d, dict) or not d.get('access_token'):
        return None
    user = d.get('user') or {}
    expires_at = d.get('expires_at')
    if expires_at is None and d.get('expires_in') is not None:
        expires_at = int(time.time()) + int(d['expires_in'])
    return Session(
        access_token=d['access_token'],
        refresh_token=d.get('refresh_token'),
        expires_at=int(expires_at) if expires_at is not None else None,
        user_id=d.get('user_id') or user.get('id'),
        email=(d.get('email') or user.get('email') or None),
        admin_verified=bool(d.get('admin_verified', False)),
    )


@dataclass(frozen=True)
class CollectionSpec:
    """How one route binds to one backend collection."""
    name: str
    label: str
    route: str
    order_by: str = 'created_at'
    ascending: bool = False
    select: str = '*'
    search_fields: Tuple[str, ...] = ()
    columns: Tuple[str, ...] = ()
    required_fields: Tuple[str, ...] = ()
    editable_field: Optional[str] = None
    can_delete: bool = False
    can_insert: bool = False
    noun: str = 'row'
    icon: str = ''
    column_labels: Dict[str, str] = field(default_factory=dict, hash=False, compare=False)
