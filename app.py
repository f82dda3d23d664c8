import logging

import streamlit as st

from domain.errors import AuthError
from services import context
from ui.components import inject_base_css
from utils.log import configure_logging

# Import the page rendering functions from the view modules
from views import app_context, get_settings, login, dashboard, users, matches
from views.collection import make_view

logger = logging.getLogger(__name__)

DEFAULT_ROUTE = "dashboard"
LOGIN_ROUTE = "login"
LOGOUT_ERROR_KEY = "logout_error"

# --- Page Registry ---
# Maps a route to its label, rendering function, and whether it needs an admin session.
PAGE_REGISTRY = {
    "login": {
        "label": "🔐 Login",
        "render_func": login.view,
        "admin": False,
    },
    "dashboard": {
        "label": "📊 Dashboard",
        "render_func": dashboard.view,
        "admin": True,
    },
    "users": {
        "label": "👥 Users",
        "render_func": users.view,
        "admin": True,
    },
    "chats": {
        "label": "💬 Chats",
        "render_func": make_view("chats", "Messages exchanged between users."),
        "admin": True,
    },
    "matches": {
        "label": "❤️ Likes",
        "render_func": matches.view,
        "admin": True,
    },
    "comments": {
        "label": "🗨️ Comments",
        "render_func": make_view("comments", "Review all user comments below."),
        "admin": True,
    },
    "reels": {
        "label": "🎬 Reels",
        "render_func": make_view("reels", "Moderate comments posted on reels."),
        "admin": True,
    },
    "profiles": {
        "label": "👤 Profiles",
        "render_func": make_view("profiles"),
        "admin": True,
    },
    "search-profiles": {
        "label": "🔍 Search Profiles",
        "render_func": make_view("search-profiles"),
        "admin": True,
    },
    "user-favs": {
        "label": "⭐ User Favorites",
        "render_func": make_view("user-favs"),
        "admin": True,
    },
}


def resolve_route(requested, authorized: bool) -> str:
    """Map a requested route to the one that is actually rendered.

    Without an authorized admin session every route renders the login view;
    with one, the login route and unknown routes fall back to the dashboard.
    """
    if not authorized:
        return LOGIN_ROUTE
    if requested not in PAGE_REGISTRY or not PAGE_REGISTRY[requested]["admin"]:
        return DEFAULT_ROUTE
    return requested


def _logout(gate):
    try:
        gate.logout()
    except AuthError as e:
        # Shown after the rerun below, on the login page
        st.session_state[LOGOUT_ERROR_KEY] = str(e)
    context.reset_controllers(st.session_state)
    st.session_state.pop('dashboard_summary', None)
    st.query_params['page'] = DEFAULT_ROUTE
    st.rerun()


def show_logout_error():
    message = st.session_state.pop(LOGOUT_ERROR_KEY, None)
    if message:
        st.warning(f"⚠️ {message}")


def main():
    """
    Main application router.

    Resolves the requested route from the query string (or a pending in-app
    navigation), gates it on the admin session, and renders the page.
    """
    st.set_page_config(page_title="Admin Panel", page_icon="💗", layout="wide")
    inject_base_css()

    try:
        settings = get_settings()
    except ValueError as e:
        st.error(str(e))
        st.stop()
    configure_logging(settings.log_level)
    show_logout_error()

    gate = app_context().gate

    # In-app navigation wins over the query string
    if 'nav_target' in st.session_state:
        requested = st.session_state.pop('nav_target')
    else:
        requested = st.query_params.get('page', DEFAULT_ROUTE)

    route = resolve_route(requested, gate.is_authorized)

    if route == LOGIN_ROUTE:
        PAGE_REGISTRY[LOGIN_ROUTE]["render_func"]()
        return

    st.query_params['page'] = route

    # --- Sidebar ---
    st.sidebar.title("💗 Admin Panel")
    admin_pages = {k: v for k, v in PAGE_REGISTRY.items() if v["admin"]}
    page_keys = list(admin_pages.keys())
    page_labels = [v["label"] for v in admin_pages.values()]
    selected_label = st.sidebar.radio(
        "Navigation", page_labels, index=page_keys.index(route))
    selected = page_keys[page_labels.index(selected_label)]
    if selected != route:
        st.query_params['page'] = selected
        st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Signed in as {gate.email}")
    if st.sidebar.button("🚪 Logout"):
        _logout(gate)

    # --- Page Rendering ---
    admin_pages[route]["render_func"]()


if __name__ == "__main__":
    main()
