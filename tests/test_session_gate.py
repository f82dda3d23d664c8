import json
import time
from unittest.mock import MagicMock

import pytest

from domain.constants import ACCESS_DENIED_MESSAGE
from domain.errors import AuthError, ValidationError
from domain.models import Session
from services.auth import AuthClient, SIGNED_IN, TOKEN_REFRESHED
from services.backend import Backend
from services.persistence import SessionStore
from services.remote import CollectionClient
from services.session_gate import SessionGate


def make_response(status=200, body=None):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.headers = {}
    response.json.return_value = body
    return response


def token_body(token='tok', email='admin@x.com', expires_in=3600):
    return {'access_token': token, 'refresh_token': f'{token}-refresh', 'expires_in': expires_in,
            'token_type': 'bearer', 'user': {'id': 'uid-1', 'email': email}}


class FakeBackendHttp:
    """Routes requests by path like the hosted auth + table endpoints would."""

    def __init__(self, admin_rows=None, sign_in_ok=True, admin_status=200,
                 refresh_ok=True, logout_status=204):
        self.admin_rows = admin_rows if admin_rows is not None else []
        self.sign_in_ok = sign_in_ok
        self.admin_status = admin_status
        self.refresh_ok = refresh_ok
        self.logout_status = logout_status
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append((method, url, params))
        if url.endswith('/auth/v1/token'):
            if params['grant_type'] == 'password':
                if not self.sign_in_ok:
                    return make_response(400, {'error': 'invalid_grant',
                                               'error_description': 'Invalid login credentials'})
                return make_response(200, token_body(email=json['email']))
            if not self.refresh_ok:
                return make_response(400, {'error_description': 'Invalid Refresh Token'})
            return make_response(200, token_body(token='fresh'))
        if url.endswith('/auth/v1/logout'):
            return make_response(self.logout_status, {'msg': 'logout failed'})
        if url.endswith('/rest/v1/admins'):
            if self.admin_status != 200:
                return make_response(self.admin_status, {'message': 'permission denied'})
            return make_response(200, self.admin_rows)
        raise AssertionError(f'unexpected call {method} {url}')

    def paths(self):
        return [url.split('.co', 1)[1] for _, url, _ in self.calls]


def make_gate(http):
    backend = Backend('https://example.supabase.co', 'anon', http=http)
    auth = AuthClient(backend)
    store = SessionStore({})
    gate = SessionGate(auth, CollectionClient(backend, 'admins'), store)
    return gate, store, backend


def write_session(store, **overrides):
    data = {'access_token': 'stored', 'refresh_token': 'stored-refresh',
            'expires_at': int(time.time()) + 3600, 'user_id': 'uid-1',
            'email': 'admin@x.com', 'admin_verified': True}
    data.update(overrides)
    store.save(data)


def test_non_admin_sign_in_is_denied_and_not_persisted():
    http = FakeBackendHttp(admin_rows=[])
    gate, store, backend = make_gate(http)
    with pytest.raises(AuthError) as exc:
        gate.login('someone@x.com', 'secret')
    assert str(exc.value) == ACCESS_DENIED_MESSAGE
    assert gate.session is None
    assert not gate.is_authorized
    assert store.load() is None
    assert backend.access_token is None
    assert http.paths()[-1] == '/auth/v1/logout'


def test_admin_sign_in_is_persisted_and_authorized():
    http = FakeBackendHttp(admin_rows=[{'id': 1, 'email': 'admin@x.com'}])
    gate, store, backend = make_gate(http)
    session = gate.login('  Admin@X.com ', ' pw ')
    assert session.email == 'admin@x.com'
    assert gate.is_authorized
    stored = store.load()
    assert stored['access_token'] == 'tok'
    assert stored['admin_verified'] is True
    assert backend.access_token == 'tok'
    # sign-in then allow-list lookup, nothing else
    assert http.paths() == ['/auth/v1/token', '/rest/v1/admins']
    assert http.calls[1][2]['email'] == 'eq.admin@x.com'


def test_failed_allow_list_lookup_denies_access():
    http = FakeBackendHttp(admin_status=500)
    gate, store, _ = make_gate(http)
    with pytest.raises(AuthError):
        gate.login('admin@x.com', 'pw')
    assert store.load() is None
    assert not gate.is_authenticated


def test_bad_credentials_surface_backend_message():
    http = FakeBackendHttp(sign_in_ok=False)
    gate, store, _ = make_gate(http)
    with pytest.raises(AuthError) as exc:
        gate.login('admin@x.com', 'wrong')
    assert 'Invalid login credentials' in str(exc.value)
    assert store.load() is None


def test_blank_credentials_are_rejected_locally():
    http = FakeBackendHttp()
    gate, _, _ = make_gate(http)
    with pytest.raises(ValidationError):
        gate.login('', 'pw')
    assert http.calls == []


def test_pending_session_is_not_authorized_or_persisted():
    gate, store, _ = make_gate(FakeBackendHttp())
    gate.on_change(SIGNED_IN, Session(access_token='t1', email='a@x.com'))
    assert gate.is_authenticated
    assert not gate.is_authorized
    assert store.load() is None


def test_duplicate_change_callbacks_are_idempotent():
    store = MagicMock()
    auth = MagicMock()
    gate = SessionGate(auth, MagicMock(), store)
    session = Session(access_token='t1', email='a@x.com', admin_verified=True)
    gate.on_change(TOKEN_REFRESHED, session)
    gate.on_change(TOKEN_REFRESHED, session)
    store.save.assert_called_once()
    gate.on_change('SIGNED_OUT', None)
    gate.on_change('SIGNED_OUT', None)
    store.clear.assert_called_once()


def test_restore_reads_verified_session():
    gate, store, backend = make_gate(FakeBackendHttp())
    write_session(store)
    session = gate.restore()
    assert session.access_token == 'stored'
    assert gate.is_authorized
    assert backend.access_token == 'stored'


def test_restore_with_nothing_stored():
    gate, _, backend = make_gate(FakeBackendHttp())
    assert gate.restore() is None
    assert not gate.is_authenticated
    assert backend.access_token is None


def test_restore_discards_unverified_session():
    gate, store, _ = make_gate(FakeBackendHttp())
    write_session(store, admin_verified=False)
    assert gate.restore() is None
    assert store.load() is None


def test_restore_refreshes_expired_session():
    http = FakeBackendHttp()
    gate, store, backend = make_gate(http)
    write_session(store, expires_at=int(time.time()) - 10)
    session = gate.restore()
    assert session.access_token == 'fresh'
    assert session.admin_verified
    assert store.load()['access_token'] == 'fresh'
    assert backend.access_token == 'fresh'


def test_restore_clears_session_that_cannot_refresh():
    gate, store, _ = make_gate(FakeBackendHttp(refresh_ok=False))
    write_session(store, expires_at=int(time.time()) - 10)
    assert gate.restore() is None
    assert store.load() is None


def test_logout_clears_state_even_when_remote_fails():
    http = FakeBackendHttp(admin_rows=[{'id': 1}], logout_status=500)
    gate, store, backend = make_gate(http)
    gate.login('admin@x.com', 'pw')
    with pytest.raises(AuthError):
        gate.logout()
    assert gate.session is None
    assert store.load() is None
    assert backend.access_token is None


def test_stored_session_is_plain_data_without_password():
    http = FakeBackendHttp(admin_rows=[{'id': 1}])
    gate, store, _ = make_gate(http)
    gate.login('admin@x.com', 'pw')
    data = json.loads(json.dumps(store.load()))
    assert data['email'] == 'admin@x.com'
    assert 'password' not in data


def test_non_json_sign_in_body_is_auth_error():
    http = MagicMock()
    response = make_response(200)
    response.json.side_effect = ValueError('Expecting value')
    http.request.return_value = response
    gate, store, _ = make_gate(http)
    with pytest.raises(AuthError):
        gate.login('admin@x.com', 'pw')
    assert store.load() is None
    assert not gate.is_authenticated
