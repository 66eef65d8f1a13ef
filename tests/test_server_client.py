"""Unit tests for ServerClient."""

import httpx
import pytest

from cli.server_client import ServerClient


TREE = {
    'name': 'alice',
    'type': 'directory',
    'path': '.',
    'children': [
        {
            'name': 'abc123',
            'type': 'directory',
            'path': 'abc123',
            'children': [
                {'name': 'a.txt', 'type': 'file', 'path': 'abc123/a.txt', 'size': 2048},
                {'name': 'index.html', 'type': 'file', 'path': 'abc123/index.html', 'size': 300},
            ],
        }
    ],
}


@pytest.fixture
def mock_transport_success():
    """Mock transport that returns successful responses."""
    def handler(request):
        if request.url.path == '/auth/register':
            return httpx.Response(201, json={'username': 'alice', 'api_key': 'upz_test123'})
        elif request.url.path == '/auth/login':
            return httpx.Response(200, json={'username': 'alice', 'api_key': 'upz_newkey456'})
        elif request.url.path == '/auth/logout':
            return httpx.Response(204)
        elif request.url.path == '/api/upload':
            return httpx.Response(201, json={
                'folder_id': 'abc123',
                'files': ['test.txt'],
                'links': ['/download/alice/abc123/test.txt'],
                'index_link': '/download/alice/abc123/index.html',
            })
        elif request.url.path == '/api/files':
            return httpx.Response(200, json=TREE)
        elif request.url.path == '/download/alice/abc123/a.txt':
            return httpx.Response(200, content=b'hi')
        elif request.url.path == '/download/alice/abc123/my file.txt':
            return httpx.Response(200, content=b'spaced')

        return httpx.Response(404, json={'detail': 'File not found', 'code': 'RESOURCE_NOT_FOUND'})

    return httpx.MockTransport(handler)


def _client(config, handler_or_transport):
    transport = handler_or_transport
    if not isinstance(transport, httpx.MockTransport):
        transport = httpx.MockTransport(handler_or_transport)
    client = ServerClient(config)
    client.session = httpx.Client(transport=transport, base_url='http://test')
    return client


@pytest.fixture
def client_with_mock(temp_config, mock_transport_success):
    """Create ServerClient with mocked HTTP transport."""
    return _client(temp_config, mock_transport_success)


def test_register_success(client_with_mock, temp_config):
    """Test successful registration saves the session token."""
    result = client_with_mock.register('alice', 'pw123')

    assert 'Register successful' in result
    assert temp_config.get_api_key() == 'upz_test123'
    assert temp_config.get_username() == 'alice'


def test_register_duplicate(temp_config):
    client = _client(temp_config, lambda r: httpx.Response(409, json={'detail': 'exists', 'code': 'USER_ALREADY_EXISTS'}))

    result = client.register('alice', 'pass')
    assert 'Username already taken' in result
    assert temp_config.get_api_key() is None


def test_login_success(client_with_mock, temp_config):
    result = client_with_mock.login('alice', 'pw123')

    assert 'Login successful' in result
    assert temp_config.get_api_key() == 'upz_newkey456'


@pytest.mark.parametrize("status,code,message", [
    (401, 'WRONG_SECRET', 'Incorrect password'),
    (404, 'USER_NOT_FOUND', 'User not found'),
])
def test_login_failures(temp_config, status, code, message):
    client = _client(temp_config, lambda r: httpx.Response(status, json={'detail': 'x', 'code': code}))

    assert message in client.login('alice', 'pw')


def test_logout_clears_config(client_with_mock, temp_config):
    temp_config.set_api_key('upz_test')

    assert client_with_mock.logout() == 'Logged out.'
    assert temp_config.get_api_key() is None


def test_upload_success(client_with_mock, temp_config, sample_file):
    temp_config.set_api_key('upz_test')

    result = client_with_mock.upload_files([str(sample_file)])

    assert 'abc123' in result
    assert '/download/alice/abc123/test.txt' in result
    assert 'Share page' in result


def test_upload_sends_every_file_in_one_request(temp_config, multiple_sample_files):
    temp_config.set_api_key('upz_test')
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json={
            'folder_id': 'abc123',
            'files': [f'test{i}.txt' for i in range(3)],
            'links': [f'/download/alice/abc123/test{i}.txt' for i in range(3)],
            'index_link': '/download/alice/abc123/index.html',
        })

    client = _client(temp_config, handler)
    client.upload_files([str(p) for p in multiple_sample_files])

    assert len(seen) == 1
    body = seen[0].read()
    for i in range(3):
        assert f'filename="test{i}.txt"'.encode() in body
    assert seen[0].headers['Authorization'] == 'Bearer upz_test'


def test_upload_not_logged_in(client_with_mock, sample_file):
    assert 'Not logged in' in client_with_mock.upload_files([str(sample_file)])


def test_upload_missing_file(client_with_mock, temp_config, tmp_path):
    temp_config.set_api_key('upz_test')
    result = client_with_mock.upload_files([str(tmp_path / 'nope.txt')])
    assert 'Not a file' in result


def test_upload_empty_batch_error(temp_config, sample_file):
    temp_config.set_api_key('upz_test')
    client = _client(temp_config, lambda r: httpx.Response(400, json={'detail': 'No files uploaded', 'code': 'EMPTY_BATCH'}))

    assert 'No files were uploaded' in client.upload_files([str(sample_file)])


def test_list_files_renders_tree(client_with_mock, temp_config):
    temp_config.set_api_key('upz_test')

    result = client_with_mock.list_files()

    assert 'abc123/' in result
    assert 'a.txt (2.00 KiB)' in result
    assert 'index.html (300 B)' in result


def test_download_writes_file(client_with_mock, temp_config, tmp_path):
    temp_config.set_api_key('upz_test')
    target = tmp_path / 'out' / 'copy.txt'

    result = client_with_mock.download('alice', 'abc123', 'a.txt', str(target))

    assert 'Downloaded a.txt' in result
    assert target.read_bytes() == b'hi'


def test_download_into_directory(client_with_mock, temp_config, tmp_path):
    temp_config.set_api_key('upz_test')

    client_with_mock.download('alice', 'abc123', 'my file.txt', str(tmp_path))

    assert (tmp_path / 'my file.txt').read_bytes() == b'spaced'


def test_download_forbidden(temp_config, tmp_path):
    temp_config.set_api_key('upz_test')
    client = _client(temp_config, lambda r: httpx.Response(403, json={'detail': 'no', 'code': 'FORBIDDEN'}))

    result = client.download('alice', 'abc123', 'a.txt', str(tmp_path / 'a.txt'))

    assert 'own namespace' in result
    assert not (tmp_path / 'a.txt').exists()


class DroppingStream(httpx.SyncByteStream):
    """Body that breaks off after the first chunk, like a lost connection."""

    def __iter__(self):
        yield b'par'
        raise httpx.ReadError('connection reset')


def test_interrupted_download_leaves_no_file(temp_config, tmp_path):
    temp_config.set_api_key('upz_test')
    client = _client(temp_config, lambda r: httpx.Response(200, stream=DroppingStream()))
    target = tmp_path / 'out' / 'a.txt'

    result = client.download('alice', 'abc123', 'a.txt', str(target))

    assert 'interrupted' in result
    assert list((tmp_path / 'out').iterdir()) == []


def test_retry_on_server_error(temp_config, monkeypatch):
    monkeypatch.setattr('cli.server_client.time.sleep', lambda s: None)
    temp_config.set_api_key('upz_test')
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=TREE)

    client = _client(temp_config, handler)

    assert 'abc123/' in client.list_files()
    assert len(attempts) == 3


def test_connection_error_reported(temp_config, monkeypatch):
    monkeypatch.setattr('cli.server_client.time.sleep', lambda s: None)
    temp_config.set_api_key('upz_test')

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = _client(temp_config, handler)

    assert 'Cannot connect' in client.list_files()
