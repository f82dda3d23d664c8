"""Per-browser-session wiring of backend, auth, gate and page controllers.

Everything is kept in the session state mapping Streamlit hands us, so each
visitor gets an independent bearer token and independent row sets.
"""
from dataclasses import dataclass
from typing import Any, MutableMapping

from domain.constants import ADMINS_TABLE, COLLECTIONS
from services.auth import AuthClient
from services.backend import Backend
from services.list_view import ListViewController
from services.persistence import SessionStore
from services.remote import CollectionClient
from services.session_gate import SessionGate
from utils.config import Settings

CONTEXT_KEY = 'app_context'
CONTROLLER_PREFIX = 'controller_'


@dataclass
class AppContext:
    backend: Backend
    auth: AuthClient
    gate: SessionGate


def build_context(settings: Settings, state: MutableMapping[str, Any]) -> AppContext:
    """Wire one visitor's context; the stored session lives in their own `state`."""
    backend = Backend(settings.supabase_url, settings.supabase_key,
                      timeout=settings.request_timeout)
    auth = AuthClient(backend)
    gate = SessionGate(auth, CollectionClient(backend, ADMINS_TABLE),
                       SessionStore(state))
    gate.restore()
    return AppContext(backend=backend, auth=auth, gate=gate)


def get_context(state: MutableMapping[str, Any], settings: Settings) -> AppContext:
    if CONTEXT_KEY not in state:
        state[CONTEXT_KEY] = build_context(settings, state)
    return state[CONTEXT_KEY]


def get_controller(state: MutableMapping[str, Any], route: str, backend: Backend) -> ListViewController:
    """The controller owning `route`'s rows, created on first use."""
    key = f"{CONTROLLER_PREFIX}{route}"
    if key not in state:
        spec = COLLECTIONS[route]
        state[key] = ListViewController(CollectionClient(backend, spec.name, spec.select), spec)
    return state[key]


def reset_controllers(state: MutableMapping[str, Any]):
    """Drop every page's rows (used on logout)."""
    for key in [k for k in list(state.keys()) if str(k).startswith(CONTROLLER_PREFIX)]:
        del state[key]
