import streamlit as st

from services import aggregates
from ui.components import charts
from views import viewer_timezone
from views.collection import mount, render_header, render_table

ROUTE = "matches"


def view():
    controller = mount(ROUTE)
    render_header(controller, "Weekly overview of user likes and matches")

    if controller.error and not controller.total:
        render_table(controller, ROUTE)
        return

    rows = controller.rows
    tz = viewer_timezone()
    histogram = aggregates.weekday_histogram(rows, tz=tz)
    peak = aggregates.peak_day(histogram, full_name=True)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Likes", len(rows))
    c2.metric("Peak Day", peak or "—", f"{max(histogram)} likes" if peak else None)
    c3.metric("Today", aggregates.count_today(rows, tz=tz))
    c4.metric("Active Days", f"{aggregates.active_days(histogram)}/7",
              f"{aggregates.count_this_week(rows, tz=tz)} in last 7 days", delta_color="off")

    chart_data = aggregates.weekday_chart_data(histogram)
    st.plotly_chart(charts.weekday_bar_chart(chart_data), use_container_width=True)

    with st.expander("Daily breakdown", expanded=False):
        for entry in chart_data:
            marker = " 🏆" if peak and entry["count"] == max(histogram) else ""
            st.write(f"**{entry['day']}**: {entry['count']} likes ({entry['percent']}%){marker}")

    st.write("---")
    render_table(controller, ROUTE)
