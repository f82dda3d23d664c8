"""View modules for manual routing.

This project uses a custom router in `app.py` instead of Streamlit's automatic
multi-page system. All page implementations live under `views/` and expose a
`view()` function; routes are registered in `PAGE_REGISTRY` inside `app.py`.

The helpers below give every view the same per-session context and
navigation primitive.
"""
import streamlit as st

from services import context
from utils.config import load_settings
from utils.timefmt import resolve_timezone


@st.cache_resource
def get_settings():
    return load_settings()


def app_context() -> context.AppContext:
    return context.get_context(st.session_state, get_settings())


def controller_for(route: str):
    return context.get_controller(st.session_state, route, app_context().backend)


def viewer_timezone():
    """The browser's time zone; None (server zone) when the browser has not reported one."""
    return resolve_timezone(getattr(st.context, 'timezone', None))


def navigate(route: str):
    """Switch to `route` on the next run."""
    st.session_state.nav_target = route
    st.rerun()
