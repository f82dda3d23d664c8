from unittest.mock import MagicMock

import pytest
import requests

from domain.errors import RemoteError, ValidationError
from services.backend import Backend
from services.remote import CollectionClient, parse_content_range


def make_response(status=200, body=None, headers=None):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.headers = headers or {}
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def make_client(table='users', response=None, select='*'):
    http = MagicMock()
    http.request.return_value = response or make_response(body=[])
    backend = Backend('https://example.supabase.co/', 'anon-key', timeout=5, http=http)
    return CollectionClient(backend, table, select), http


def test_list_sends_order_and_select():
    rows = [{'id': 1}, {'id': 2}]
    client, http = make_client('comments', make_response(body=rows),
                               select='id,created_at,comment_text')
    assert client.list('created_at', ascending=True) == rows
    method, url = http.request.call_args.args
    kwargs = http.request.call_args.kwargs
    assert method == 'GET'
    assert url == 'https://example.supabase.co/rest/v1/comments'
    assert kwargs['params'] == {'select': 'id,created_at,comment_text', 'order': 'created_at.asc'}
    assert kwargs['headers']['apikey'] == 'anon-key'
    assert kwargs['headers']['Authorization'] == 'Bearer anon-key'
    assert kwargs['timeout'] == 5


def test_requests_carry_session_token_once_signed_in():
    client, http = make_client()
    client.backend.access_token = 'user-token'
    client.list()
    assert http.request.call_args.kwargs['headers']['Authorization'] == 'Bearer user-token'


def test_empty_list_is_not_an_error():
    client, _ = make_client(response=make_response(body=[]))
    assert client.list() == []


def test_query_failure_raises_remote_error_with_code():
    body = {'message': 'relation "users" does not exist', 'code': '42P01'}
    client, _ = make_client(response=make_response(404, body))
    with pytest.raises(RemoteError) as exc:
        client.list()
    assert exc.value.status == 404
    assert exc.value.code == '42P01'
    assert 'does not exist' in str(exc.value)


def test_transport_failure_raises_remote_error():
    client, http = make_client()
    http.request.side_effect = requests.ConnectionError('no route to host')
    with pytest.raises(RemoteError):
        client.count()


def test_count_reads_content_range():
    client, http = make_client(response=make_response(headers={'Content-Range': '0-24/3573'}))
    assert client.count() == 3573
    assert http.request.call_args.args[0] == 'HEAD'
    assert http.request.call_args.kwargs['headers']['Prefer'] == 'count=exact'


def test_parse_content_range_edge_cases():
    assert parse_content_range('*/0') == 0
    with pytest.raises(RemoteError):
        parse_content_range(None)
    with pytest.raises(RemoteError):
        parse_content_range('0-9/*')


def test_insert_validates_required_fields_before_calling():
    client, http = make_client()
    with pytest.raises(ValidationError) as exc:
        client.insert({'username': '  ', 'email': 'a@b.com'}, required=('username', 'email'))
    assert exc.value.fields == ('username',)
    http.request.assert_not_called()


def test_insert_returns_persisted_row():
    created = {'id': 7, 'username': 'amy', 'email': 'amy@x.com', 'created_at': '2024-01-01T00:00:00Z'}
    client, http = make_client(response=make_response(201, [created]))
    assert client.insert({'username': 'amy', 'email': 'amy@x.com'}, required=('username',)) == created
    kwargs = http.request.call_args.kwargs
    assert kwargs['json'] == [{'username': 'amy', 'email': 'amy@x.com'}]
    assert kwargs['headers']['Prefer'] == 'return=representation'


def test_update_of_missing_id_is_remote_error():
    client, _ = make_client(response=make_response(200, []))
    with pytest.raises(RemoteError) as exc:
        client.update_by_id(42, {'comment_text': 'x'})
    assert exc.value.status == 404


def test_update_filters_by_id():
    client, http = make_client(response=make_response(200, [{'id': 42, 'comment_text': 'x'}]))
    assert client.update_by_id(42, {'comment_text': 'x'})['comment_text'] == 'x'
    assert http.request.call_args.args[0] == 'PATCH'
    assert http.request.call_args.kwargs['params'] == {'id': 'eq.42'}


def test_delete_is_one_filtered_call():
    client, http = make_client(response=make_response(204, ValueError('no body')))
    assert client.delete_by_id(5) is None
    assert http.request.call_args.args[0] == 'DELETE'
    assert http.request.call_args.kwargs['params'] == {'id': 'eq.5'}


def test_find_one_returns_row_or_none():
    client, http = make_client('admins', make_response(body=[{'id': 1, 'email': 'a@x.com'}]))
    assert client.find_one('email', 'a@x.com') == {'id': 1, 'email': 'a@x.com'}
    assert http.request.call_args.kwargs['params']['email'] == 'eq.a@x.com'
    http.request.return_value = make_response(body=[])
    assert client.find_one('email', 'nobody@x.com') is None


@pytest.mark.parametrize('call', [
    lambda c: c.list(),
    lambda c: c.recent(),
    lambda c: c.insert({'username': 'amy'}),
    lambda c: c.update_by_id(1, {'username': 'amy'}),
    lambda c: c.find_one('email', 'a@x.com'),
])
def test_non_json_success_body_is_remote_error(call):
    page = make_response(200, ValueError('Expecting value: line 1 column 1'))
    client, _ = make_client(response=page)
    with pytest.raises(RemoteError) as exc:
        call(client)
    assert exc.value.status == 200
