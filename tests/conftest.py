"""Pytest fixtures for cloudpub tests."""
import os
import tempfile
from pathlib import Path

import pytest

from cloudpub import UploadConfig, UploadSource


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(self, status=200, payload=None, text=''):
        self.status = status
        self._payload = payload if payload is not None else {}
        self._text = text

    async def json(self, content_type=None):
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records posts and answers with queued responses."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def post(self, url, data=None, headers=None):
        self.calls.append({'url': url, 'data': data, 'headers': headers or {}})
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse(payload={'public_id': 'done'})

    async def close(self):
        self.closed = True


class RecordingTransport:
    """Transport double that records what the coordinator sends."""

    def __init__(self):
        self.files = []
        self.urls = []
        self.chunks = []

    async def send_file(self, resource_type, form, filename, content):
        self.files.append((resource_type, form, filename, content))
        return {'kind': 'file', 'filename': filename}

    async def send_url(self, resource_type, form, url):
        self.urls.append((resource_type, form, url))
        return {'kind': 'url', 'url': url}

    async def send_chunk(self, resource_type, form, part, upload_id, total_size):
        content = await part.read()
        self.chunks.append((resource_type, form, part, upload_id, total_size, content))
        return {'kind': 'chunk', 'index': len(self.chunks) - 1}

    async def close(self):
        pass


@pytest.fixture
def payload():
    """250 bytes of non-repeating-ish content."""
    return bytes(i % 251 for i in range(250))


@pytest.fixture
def temp_file(payload):
    """Temporary file holding the payload."""
    fd, path = tempfile.mkstemp(suffix='.bin')
    os.write(fd, payload)
    os.close(fd)
    yield Path(path)
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def buffer_source(payload):
    return UploadSource.from_buffer(payload, identifier='buffer.bin')


@pytest.fixture
def bytes_source(payload):
    return UploadSource.from_bytes(list(payload), identifier='bytes.bin')


@pytest.fixture
def path_source(temp_file):
    return UploadSource.from_file(temp_file)


@pytest.fixture
def url_source():
    return UploadSource.from_url('https://example.com/cat.jpg')


@pytest.fixture
def config():
    return UploadConfig(cloud_name='demo', upload_preset='unsigned', chunk_size=100)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def make_session():
    """Factory for sessions answering one request with the given response."""
    def factory(status=200, payload=None, text=''):
        return FakeSession([FakeResponse(status=status, payload=payload, text=text)])
    return factory
