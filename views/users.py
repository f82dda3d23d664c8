import streamlit as st

from domain.errors import ValidationError
from services.users import build_user_insert
from ui.components import user_form
from views.collection import mount, render_header, render_table

ROUTE = "users"


def view():
    controller = mount(ROUTE)
    render_header(controller, "Every registered account, newest first.")

    if 'users_show_form' not in st.session_state:
        st.session_state.users_show_form = False
    label = "✖ Close Form" if st.session_state.users_show_form else "➕ Add User"
    if st.button(label, key="users_toggle_form"):
        st.session_state.users_show_form = not st.session_state.users_show_form
        st.rerun()

    if st.session_state.users_show_form:
        submitted = user_form.render("add_user", controller.form_version)
        if submitted is not None:
            try:
                fields = build_user_insert(submitted)
            except ValidationError as e:
                st.error(f"⚠️ {e}")
            else:
                with st.spinner("Adding user..."):
                    added = controller.request_insert(fields)
                if added:
                    st.rerun()

    render_table(controller, ROUTE)
