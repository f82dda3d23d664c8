"""
This package provides a collection of reusable UI components for the Streamlit application.

It is organized into several modules, each containing a specific category of components:
- `base`: CSS injection, status badges and the loading / empty / error panels.
- `cards`: Stat cards and the recent-user card on the dashboard.
- `charts`: Plotly figures (weekday histogram, distributions).
- `data_table`: The generic table bound to a list-view controller.
- `user_form`: The add-user form.

By importing the components here, we provide a single, consistent access point
for the rest of the application (`from ui import components`).
"""

from .base import (
    inject_base_css,
    status_badge,
    loading_state,
    empty_state,
    error_state,
)

from .cards import (
    stat_card,
    recent_user_card,
)
