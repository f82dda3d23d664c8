"""Runtime settings, read from the environment (and an optional .env file)."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    request_timeout: float = DEFAULT_TIMEOUT
    log_level: str = 'INFO'


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from `environ` (defaults to os.environ after loading .env).

    Raises ValueError naming every missing required variable.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    url = (environ.get('SUPABASE_URL') or '').strip().rstrip('/')
    key = (environ.get('SUPABASE_ANON_KEY') or '').strip()
    missing = [name for name, value in
               (('SUPABASE_URL', url), ('SUPABASE_ANON_KEY', key)) if not value]
    if missing:
        raise ValueError(
            f"Missing required configuration: {', '.join(missing)}. "
            "Set them in the environment or in a .env file.")

    raw_timeout = environ.get('REQUEST_TIMEOUT') or DEFAULT_TIMEOUT
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(f"REQUEST_TIMEOUT must be a number, got {raw_timeout!r}")
    if timeout <= 0:
        raise ValueError("REQUEST_TIMEOUT must be positive")

    return Settings(
        supabase_url=url,
        supabase_key=key,
        request_timeout=timeout,
        log_level=(environ.get('LOG_LEVEL') or 'INFO').upper(),
    )
