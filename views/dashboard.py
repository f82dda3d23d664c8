import logging

import streamlit as st

from domain.constants import DASHBOARD_TABLES, TABLE_ICONS, TABLE_ROUTES
from domain.errors import RemoteError
from services import admin as admin_svc, aggregates
from ui.components import charts, error_state, recent_user_card, stat_card
from views import app_context, navigate, viewer_timezone
from views.collection import mount

logger = logging.getLogger(__name__)

SUMMARY_KEY = 'dashboard_summary'


def _load_summary(force: bool = False):
    """Counts and recent users, fetched once per session unless refreshed."""
    if not force and SUMMARY_KEY in st.session_state:
        return st.session_state[SUMMARY_KEY]
    backend = app_context().backend
    with st.spinner("Loading dashboard..."):
        counts = admin_svc.fetch_table_counts(backend, DASHBOARD_TABLES)
        recent = admin_svc.recent_users(backend, limit=5)
    summary = {"counts": counts, "recent": recent}
    st.session_state[SUMMARY_KEY] = summary
    return summary


def view():
    st.header("📊 Dashboard Overview")

    refresh = st.button("🔄 Refresh", key="dashboard_refresh")
    try:
        summary = _load_summary(force=refresh)
    except RemoteError as e:
        logger.error("Dashboard counts failed: %s", e)
        if error_state(f"Error fetching counts: {e}", "dashboard_retry"):
            st.session_state.pop(SUMMARY_KEY, None)
            st.rerun()
        return
    counts = summary["counts"]

    # Stat grid, 4 per row
    for start in range(0, len(DASHBOARD_TABLES), 4):
        cols = st.columns(4)
        for col, table in zip(cols, DASHBOARD_TABLES[start:start + 4]):
            with col:
                if stat_card(table.replace('_', ' '), counts.get(table, 0),
                             TABLE_ICONS.get(table, ''), key=f"stat_{table}"):
                    navigate(TABLE_ROUTES[table])

    users = mount("users")
    if users.error:
        st.warning(users.error)
    user_rows = users.rows
    tz = viewer_timezone()
    histogram = aggregates.weekday_histogram(user_rows, tz=tz)

    c1, c2, c3 = st.columns(3)
    c1.metric("New users today", aggregates.count_today(user_rows, tz=tz))
    c2.metric("New users this week", aggregates.count_this_week(user_rows, tz=tz))
    c3.metric("Busiest signup day", aggregates.peak_day(histogram, full_name=True) or "—")

    left, right = st.columns(2)
    with left:
        st.plotly_chart(charts.weekday_area_chart(aggregates.weekday_chart_data(histogram)),
                        use_container_width=True)
    with right:
        st.plotly_chart(charts.distribution_pie(admin_svc.engagement_distribution(counts),
                                                "User Engagement Distribution"),
                        use_container_width=True)

    st.plotly_chart(charts.distribution_bar(admin_svc.content_distribution(counts),
                                            "Content Distribution"),
                    use_container_width=True)

    st.subheader("👥 Recent Users")
    if summary["recent"]:
        for user in summary["recent"]:
            recent_user_card(user)
    else:
        st.caption("No recent activity")
