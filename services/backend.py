"""
HTTP transport for the hosted backend (a Supabase project).

Tables are served by PostgREST under ``/rest/v1`` and auth by GoTrue under
``/auth/v1``. Every call here is a single round trip with a timeout; failures
surface as RemoteError and are never retried.
"""
import logging
from typing import Any, Dict, Optional

import requests

from domain.errors import RemoteError

logger = logging.getLogger(__name__)

REST_PREFIX = '/rest/v1'
AUTH_PREFIX = '/auth/v1'


def error_message(response: requests.Response) -> str:
    """Best-effort human message from a PostgREST or GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ('message', 'error_description', 'msg', 'error'):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


def error_code(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get('code') is not None:
        return str(body['code'])
    return None


def read_json(response: requests.Response) -> Any:
    """Decoded body of a successful response; a non-JSON body is a RemoteError."""
    try:
        return response.json()
    except ValueError as e:
        logger.warning("Unreadable %s response body: %s", response.status_code, e)
        raise RemoteError("Backend returned an unreadable response",
                          status=response.status_code) from e


class Backend:
    """Shared transport: base URL, anon key, current bearer token."""

    def __init__(self, url: str, api_key: str, timeout: float = 10.0,
                 http: Optional[requests.Session] = None):
        self.url = url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.http = http or requests.Session()
        self.access_token: Optional[str] = None

    def headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        token = self.access_token or self.api_key
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {token}',
        }
        if extra:
            headers.update(extra)
        return headers

    def request(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None,
                json: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        url = f"{self.url}{path}"
        try:
            response = self.http.request(
                method, url, params=params, json=json,
                headers=self.headers(headers), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise RemoteError(f"Could not reach the backend: {e}") from e
        if not response.ok:
            message = error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise RemoteError(message, status=response.status_code, code=error_code(response))
        return response

    def rest(self, method: str, table: str, **kwargs) -> requests.Response:
        return self.request(method, f"{REST_PREFIX}/{table}", **kwargs)

    def auth(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        return self.request(method, f"{AUTH_PREFIX}/{endpoint}", **kwargs)
