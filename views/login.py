import logging

import streamlit as st

from domain.errors import AuthError, ValidationError
from views import app_context, navigate

logger = logging.getLogger(__name__)


def view():
    st.markdown(
        "<h1 style='text-align:center;'>🔐 Admin Login</h1>"
        "<p style='text-align:center;color:#6b7280;'>Welcome back! Please login to continue.</p>",
        unsafe_allow_html=True,
    )
    gate = app_context().gate

    _, center, _ = st.columns([1, 2, 1])
    with center:
        with st.form("admin_login"):
            email = st.text_input("Email Address", placeholder="admin@example.com")
            password = st.text_input("Password", type="password", placeholder="••••••••")
            submitted = st.form_submit_button("Login", use_container_width=True)

        if submitted:
            try:
                with st.spinner("Logging in..."):
                    gate.login(email, password)
            except (AuthError, ValidationError) as e:
                logger.info("Login rejected: %s", e)
                st.error(f"⚠️ {e}")
                return
            navigate("dashboard")
