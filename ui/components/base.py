import streamlit as st

PRIMARY_ACCENT = "#DB2777"  # pink-600
GREEN = "#059669"  # emerald-600
YELLOW = "#D97706"  # amber-600
RED = "#DC2626"  # red-600
CHIP_BG = "#374151"


def inject_base_css():
    """Theme styles; Streamlit drops them on every rerun, so call once per run."""
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            background:{CHIP_BG}; color:#F9FAFB; margin-right:4px; margin-bottom:4px;
        }}
        .badge.green {{background:{GREEN};}}
        .badge.yellow {{background:{YELLOW};}}
        .badge.red {{background:{RED};}}
        .stat-card {{
            border-left:4px solid {PRIMARY_ACCENT}; border-radius:10px;
            padding:10px 14px; background:#fff; box-shadow:0 1px 3px rgba(0,0,0,.08);
        }}
        .stat-card .label {{font-size:11px; font-weight:600; color:#4B5563; text-transform:uppercase;}}
        .stat-card .value {{font-size:26px; font-weight:700; color:#1F2937;}}
        .empty-state {{text-align:center; color:#6B7280; padding:2rem 0; font-style:italic;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def status_badge(status: str) -> str:
    cls = "green" if status.lower() in {"verified", "active", "yes"} else "yellow"
    return f'<span class="badge {cls}">{status}</span>'


def loading_state(noun: str):
    """Spinner-style placeholder shown while rows are being fetched."""
    st.info(f"⏳ Loading {noun}...")


def empty_state(noun: str, icon: str = ""):
    st.markdown(
        f"<div class='empty-state'>{icon} No {noun} found.</div>",
        unsafe_allow_html=True,
    )


def error_state(message: str, retry_key: str) -> bool:
    """Render a load error with a retry link; returns True when retry is pressed."""
    st.error(f"⚠️ {message}")
    return st.button("Retry", key=retry_key)
