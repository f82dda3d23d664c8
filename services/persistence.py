"""Per-visitor persisted state.

The admin session is kept in the visitor's own state mapping (Streamlit's
``st.session_state``), never in a file or cache shared by the server process.
"""
import logging
from typing import Any, Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)

SESSION_KEY = 'admin_session'


class SessionStore:
    """The single persisted key holding the serialized admin session."""

    def __init__(self, state: MutableMapping[str, Any], key: str = SESSION_KEY):
        self.state = state
        self.key = key

    def load(self) -> Optional[Dict[str, Any]]:
        data = self.state.get(self.key)
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed stored session under %s", self.key)
            return None
        return dict(data)

    def save(self, data: Dict[str, Any]):
        self.state[self.key] = dict(data)

    def clear(self):
        self.state.pop(self.key, None)
