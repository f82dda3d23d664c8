"""Generic list page: one controller, one collection, one route."""
import streamlit as st

from domain.constants import COLLECTIONS
from services.list_view import ListViewController
from ui.components import data_table
from views import controller_for


def render_header(controller: ListViewController, subtitle: str = ""):
    spec = controller.spec
    st.header(f"{spec.icon} {spec.label} ({controller.total})")
    if subtitle:
        st.caption(subtitle)


def render_table(controller: ListViewController, key: str):
    """Toolbar, feedback, confirmation and rows for a loaded controller."""
    data_table.render_toolbar(controller, key)
    data_table.render_feedback(controller)
    data_table.render_delete_confirmation(controller, key)
    if data_table.render_state(controller, key):
        data_table.render_rows(controller, key)


def mount(route: str) -> ListViewController:
    controller = controller_for(route)
    with st.spinner(f"Loading {controller.spec.noun}s..."):
        controller.ensure_loaded()
    return controller


def make_view(route: str, subtitle: str = ""):
    """Build the `view()` callable for a plain list route."""
    if route not in COLLECTIONS:
        raise KeyError(f"Unknown collection route: {route}")

    def view():
        controller = mount(route)
        render_header(controller, subtitle)
        render_table(controller, route)

    view.__name__ = f"view_{route.replace('-', '_')}"
    return view
