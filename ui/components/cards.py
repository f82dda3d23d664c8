import streamlit as st
from typing import Dict, Any, Optional

from utils.timefmt import format_date


def stat_card(label: str, value: Any, icon: str = "", key: Optional[str] = None) -> bool:
    """
    Displays a per-table total; returns True when its "View" button is pressed.
    """
    st.markdown(
        f"""
        <div class="stat-card">
            <div class="label">{icon} {label}</div>
            <div class="value">{value if value is not None else 0}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    return st.button("View", key=key or f"stat_{label}", use_container_width=True)


def recent_user_card(user: Dict[str, Any]):
    email = user.get('email') or "Unknown User"
    initial = email[0].upper() if user.get('email') else "U"
    st.markdown(
        f"""
        <div style="
            border: 1px solid #fbcfe8;
            border-radius: 8px;
            padding: 8px 12px;
            margin-bottom: 8px;
            display: flex;
            align-items: center;
            gap: 10px;
            background: linear-gradient(90deg, #fdf2f8, #faf5ff);
        ">
            <div style="width:32px;height:32px;border-radius:50%;background:#db2777;color:#fff;
                        display:flex;align-items:center;justify-content:center;font-weight:700;">{initial}</div>
            <div>
                <div style="font-weight: 600;">{email}</div>
                <small style="color: #666;">Joined {format_date(user.get('created_at'))}</small>
            </div>
        </div>
        """,
        unsafe_allow_html=True
    )
