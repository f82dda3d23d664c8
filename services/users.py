"""User form helpers: turning raw add-user form input into an insert payload."""
from typing import Any, Dict, Optional

from domain.errors import ValidationError

EMPTY_USER_FORM = {
    'username': '', 'email': '', 'age': '', 'city': '', 'country': '', 'number': '',
}


def _clean(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ''
    return text or None


def build_user_insert(form: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize form input: trim text, blank optional fields become None.

    Username and email are kept as (possibly empty) strings so the required
    field check downstream reports them by name. Raises ValidationError for a
    non-numeric or negative age.
    """
    age_raw = _clean(form.get('age'))
    age = None
    if age_raw is not None:
        if not age_raw.isdigit():
            raise ValidationError("Age must be a whole number.", ['age'])
        age = int(age_raw)
    return {
        'username': (form.get('username') or '').strip(),
        'email': (form.get('email') or '').strip(),
        'age': age,
        'city': _clean(form.get('city')),
        'country': _clean(form.get('country')),
        'number': _clean(form.get('number')),
    }
