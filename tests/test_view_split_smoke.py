import pytest
from unittest.mock import patch, MagicMock

# Load pandas/numpy outside the patched sys.modules block: numpy cannot be
# re-imported once patch.dict drops it from sys.modules.
import pandas  # noqa: F401

from domain.constants import COLLECTIONS
from domain.errors import AuthError
from services import aggregates
from services.list_view import ListViewController

# Mock streamlit before importing the app
st_mock = MagicMock()


_modules = {}


def load_modules():
    """Import the app and its view helpers once with streamlit mocked out."""
    if not _modules:
        with patch.dict("sys.modules", {"streamlit": st_mock}):
            import app
            import views
            from ui.components import data_table
        _modules.update(app=app, views=views, data_table=data_table)
    return _modules


def load_registry():
    return load_modules()["app"]


def test_page_registry_structure():
    """
    Tests that the PAGE_REGISTRY has the correct structure.
    """
    registry = load_registry().PAGE_REGISTRY
    assert isinstance(registry, dict)
    for key, value in registry.items():
        assert "label" in value
        assert "render_func" in value
        assert "admin" in value
        assert callable(value["render_func"])
        assert isinstance(value["admin"], bool)


def test_only_login_is_public():
    registry = load_registry().PAGE_REGISTRY
    public = [key for key, value in registry.items() if not value["admin"]]
    assert public == ["login"]


def test_admin_routes_match_the_navigation():
    registry = load_registry().PAGE_REGISTRY
    expected = ["dashboard", "users", "chats", "matches", "comments", "reels",
                "profiles", "search-profiles", "user-favs"]
    assert [key for key, value in registry.items() if value["admin"]] == expected


@pytest.mark.parametrize("requested, authorized, expected", [
    ("users", False, "login"),
    ("dashboard", False, "login"),
    ("users", True, "users"),
    ("login", True, "dashboard"),
    ("no-such-page", True, "dashboard"),
    (None, True, "dashboard"),
])
def test_resolve_route_gates_on_authorization(requested, authorized, expected):
    app = load_registry()
    assert app.resolve_route(requested, authorized) == expected


def test_unknown_collection_route_is_rejected():
    app = load_registry()
    with pytest.raises(KeyError):
        app.make_view("nope")


def test_logout_failure_message_survives_the_rerun(monkeypatch):
    app = load_registry()
    state = {"controller_users": object(), "dashboard_summary": {}}
    monkeypatch.setattr(st_mock, "session_state", state)
    gate = MagicMock()
    gate.logout.side_effect = AuthError("Logout failed: timeout")

    app._logout(gate)
    assert state == {app.LOGOUT_ERROR_KEY: "Logout failed: timeout"}

    st_mock.warning.reset_mock()
    app.show_logout_error()
    st_mock.warning.assert_called_once()
    assert "Logout failed: timeout" in st_mock.warning.call_args.args[0]
    assert app.LOGOUT_ERROR_KEY not in state
    # shown once only
    app.show_logout_error()
    st_mock.warning.assert_called_once()


def test_weekday_buckets_follow_the_browser_time_zone(monkeypatch):
    views = load_modules()["views"]
    # 07:30 UTC on Tuesday is still Monday evening in Los Angeles
    rows = [{"id": 1, "created_at": "2024-01-02T07:30:00Z"}]

    monkeypatch.setattr(st_mock.context, "timezone", "America/Los_Angeles")
    pacific = aggregates.weekday_histogram(rows, tz=views.viewer_timezone())
    monkeypatch.setattr(st_mock.context, "timezone", "UTC")
    utc = aggregates.weekday_histogram(rows, tz=views.viewer_timezone())

    assert pacific == [0, 1, 0, 0, 0, 0, 0]
    assert utc == [0, 0, 1, 0, 0, 0, 0]


def test_unknown_browser_time_zone_falls_back_to_server_zone(monkeypatch):
    views = load_modules()["views"]
    monkeypatch.setattr(st_mock.context, "timezone", "Mars/Olympus_Mons")
    assert views.viewer_timezone() is None
    monkeypatch.setattr(st_mock.context, "timezone", None)
    assert views.viewer_timezone() is None


def test_badge_table_escapes_user_written_cells():
    data_table = load_modules()["data_table"]
    controller = ListViewController(MagicMock(), COLLECTIONS["search-profiles"])
    rows = [{"id": 1, "username": "<b>amy</b>", "bio": "<script>alert(1)</script>",
             "city": "Paris", "country": "FR", "is_verified": True},
            {"id": 2, "username": "bo", "bio": "", "is_verified": False}]

    html_out = data_table.badge_table_html(controller, rows)

    assert "<script>" not in html_out
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html_out
    assert "&lt;b&gt;amy&lt;/b&gt;" in html_out
    assert '<span class="badge green">Verified</span>' in html_out
    assert '<span class="badge yellow">Unverified</span>' in html_out
