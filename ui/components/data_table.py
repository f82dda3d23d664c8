import html as html_module

import streamlit as st
import pandas as pd
from typing import Any, Dict, List

from .base import empty_state, error_state, loading_state, status_badge
from services.admin import export_to_csv
from services.list_view import ListViewController
from utils.timefmt import format_date


def _column_label(controller: ListViewController, column: str) -> str:
    return controller.spec.column_labels.get(column) or column.replace('_', ' ').title()


def _display_value(column: str, value: Any) -> Any:
    if column.endswith('_at'):
        return format_date(value, with_time=True)
    if value is None or value == '':
        return "N/A"
    return value


def to_frame(controller: ListViewController, rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Visible rows as a display frame, numbered from 1."""
    columns = list(controller.spec.columns)
    records = [{_column_label(controller, c): _display_value(c, r.get(c)) for c in columns}
               for r in rows]
    df = pd.DataFrame(records, columns=[_column_label(controller, c) for c in columns])
    df.index = range(1, len(df) + 1)
    return df


def badge_table_html(controller: ListViewController, rows: List[Dict[str, Any]]) -> str:
    """HTML table with a verified badge column; every other cell is escaped."""
    df = to_frame(controller, rows).map(lambda v: html_module.escape(str(v)))
    label = _column_label(controller, 'is_verified')
    df[label] = [status_badge("Verified" if r.get('is_verified') else "Unverified") for r in rows]
    return df.to_html(escape=False)


def _sort_label(controller: ListViewController) -> str:
    if controller.sort_field.endswith('_at'):
        return "⬆️ Oldest first" if controller.ascending else "⬇️ Newest first"
    return "🔤 A → Z" if controller.ascending else "🔤 Z → A"


def render_toolbar(controller: ListViewController, key: str):
    """Search box, sort toggle, refresh and CSV export."""
    c1, c2, c3, c4 = st.columns([4, 2, 1, 1])
    query = c1.text_input("Search", value=controller.query, key=f"{key}_search",
                          placeholder=f"Search {controller.spec.noun}s...",
                          label_visibility="collapsed")
    controller.set_query(query)
    if c2.button(_sort_label(controller), key=f"{key}_sort", use_container_width=True):
        controller.toggle_sort()
        st.rerun()
    if c3.button("🔄", key=f"{key}_refresh", help="Refresh", use_container_width=True):
        with st.spinner(f"Refreshing {controller.spec.noun}s..."):
            controller.refresh()
        st.rerun()
    c4.download_button("CSV", export_to_csv(controller.visible_rows),
                       f"{controller.spec.name}.csv", "text/csv",
                       key=f"{key}_csv", use_container_width=True)


def render_feedback(controller: ListViewController):
    notice = controller.pop_notice()
    if notice:
        st.success(f"✅ {notice}")
    if controller.action_error is not None:
        st.error(f"⚠️ {controller.action_error}")


def render_state(controller: ListViewController, key: str) -> bool:
    """Loading, error and empty states; returns True when rows should be drawn.

    A failed refresh keeps showing the previous rows under the error message.
    """
    if controller.is_loading:
        loading_state(f"{controller.spec.noun}s")
        return False
    if controller.error:
        if error_state(controller.error, f"{key}_retry"):
            with st.spinner("Retrying..."):
                controller.retry()
            st.rerun()
        return controller.total > 0
    if controller.is_empty:
        empty_state(f"{controller.spec.noun}s", controller.spec.icon)
        return False
    return True


def render_delete_confirmation(controller: ListViewController, key: str):
    row = controller.pending_delete
    if row is None:
        return
    noun = controller.spec.noun
    with st.container(border=True):
        st.warning(f"Are you sure you want to delete this {noun}?")
        st.caption(_row_summary(controller, row))
        c1, c2 = st.columns(2)
        if c1.button("Yes, delete", key=f"{key}_confirm_delete", type="primary"):
            with st.spinner("Deleting..."):
                controller.confirm_delete()
            st.rerun()
        if c2.button("Cancel", key=f"{key}_cancel_delete"):
            controller.cancel_delete()
            st.rerun()


def _row_summary(controller: ListViewController, row: Dict[str, Any]) -> str:
    parts = []
    for column in controller.spec.columns:
        if column.endswith('_at'):
            continue
        value = row.get(column)
        if value not in (None, ''):
            parts.append(f"**{_column_label(controller, column)}:** {value}")
    return "  |  ".join(parts) or f"id {row.get('id')}"


def render_rows(controller: ListViewController, key: str):
    rows = controller.visible_rows
    spec = controller.spec
    st.caption(f"Showing {len(rows)} of {controller.total} {spec.noun}s")
    if not rows:
        st.caption("No rows match the current search.")
        return

    if not (spec.can_delete or spec.editable_field):
        if 'is_verified' in spec.columns:
            st.write(badge_table_html(controller, rows), unsafe_allow_html=True)
        else:
            st.dataframe(to_frame(controller, rows), use_container_width=True)
        return

    for idx, row in enumerate(rows, start=1):
        row_id = row.get('id')
        busy = row_id in controller.pending_ids
        with st.container(border=True):
            if spec.editable_field and controller.editing_id == row_id:
                _render_edit(controller, row, key)
                continue
            c1, c2, c3 = st.columns([8, 1, 1])
            c1.markdown(f"**#{idx}**  {_row_summary(controller, row)}")
            c1.caption(format_date(row.get('created_at'), with_time=True))
            if spec.editable_field and c2.button("Edit", key=f"{key}_edit_{row_id}", disabled=busy):
                controller.start_edit(row)
                st.rerun()
            if spec.can_delete and c3.button("Delete", key=f"{key}_del_{row_id}", disabled=busy):
                controller.request_delete(row)
                st.rerun()


def _render_edit(controller: ListViewController, row: Dict[str, Any], key: str):
    field = controller.spec.editable_field
    row_id = row.get('id')
    new_text = st.text_area(_column_label(controller, field), value=row.get(field) or '',
                            key=f"{key}_edit_text_{row_id}")
    c1, c2 = st.columns(2)
    if c1.button("Save", key=f"{key}_save_{row_id}", type="primary"):
        with st.spinner("Saving..."):
            controller.request_update(row, {field: new_text})
        st.rerun()
    if c2.button("Cancel", key=f"{key}_cancel_edit_{row_id}"):
        controller.cancel_edit()
        st.rerun()
