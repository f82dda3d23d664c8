import streamlit as st
from typing import Dict, Any, Optional

from services.users import EMPTY_USER_FORM


def render(key_prefix: str, form_version: int = 0) -> Optional[Dict[str, Any]]:
    """
    Renders the add-user form.

    Args:
        key_prefix (str): A unique prefix for Streamlit widget keys.
        form_version (int): Bumped by the controller after a successful insert;
            a new version gets fresh widget keys, which clears the inputs.

    Returns:
        Dict[str, Any]: The raw form values, or None if not submitted.
    """
    prefix = f"{key_prefix}_{form_version}"
    with st.form(f"form_{prefix}"):
        st.subheader("➕ Add User")
        c1, c2 = st.columns(2)
        username = c1.text_input("Username *", key=f"{prefix}_username")
        email = c2.text_input("Email *", key=f"{prefix}_email")
        age = c1.text_input("Age", key=f"{prefix}_age")
        number = c2.text_input("Phone Number", key=f"{prefix}_number")
        city = c1.text_input("City", key=f"{prefix}_city")
        country = c2.text_input("Country", key=f"{prefix}_country")

        submitted = st.form_submit_button("Add User")

        if submitted:
            return {
                **EMPTY_USER_FORM,
                'username': username,
                'email': email,
                'age': age,
                'city': city,
                'country': country,
                'number': number,
            }

    return None
