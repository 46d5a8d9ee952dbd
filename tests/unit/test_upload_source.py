"""Tests for upload sources."""
import asyncio
from pathlib import Path

import pytest

from cloudpub.core.exceptions import (
    InvalidOperationError,
    InvalidRangeError,
    InvalidSourceError
)
from cloudpub.core.upload.models import ResourceType
from cloudpub.core.upload.source import (
    UploadSource,
    BufferOrigin,
    BytesOrigin,
    PathOrigin,
    UrlOrigin
)

LOCAL_SOURCES = ['buffer_source', 'bytes_source', 'path_source']


class TestConstruction:
    """Test suite for UploadSource factories."""

    def test_from_buffer(self, payload):
        source = UploadSource.from_buffer(payload, identifier="data.bin", public_id="pid")

        assert isinstance(source.origin, BufferOrigin)
        assert source.identifier == "data.bin"
        assert source.public_id == "pid"
        assert source.resource_type is ResourceType.AUTO
        assert source.is_external is False

    def test_from_bytes(self):
        source = UploadSource.from_bytes([1, 2, 3], identifier="raw.bin")

        assert isinstance(source.origin, BytesOrigin)

    def test_from_file_default_identifier(self, temp_file):
        source = UploadSource.from_file(temp_file)

        assert isinstance(source.origin, PathOrigin)
        assert source.identifier == temp_file.name

    def test_from_file_string_path(self):
        source = UploadSource.from_file("some/dir/photo.jpg", identifier="custom.jpg")

        assert source.origin.path == Path("some/dir/photo.jpg")
        assert source.identifier == "custom.jpg"

    def test_from_file_does_not_touch_disk(self):
        """Missing files only fail when queried."""
        source = UploadSource.from_file("/nonexistent/file.bin")

        assert source.identifier == "file.bin"

    def test_from_url(self):
        source = UploadSource.from_url(
            "https://example.com/a.png",
            tags=["x"],
            folder="imports",
            resource_type=ResourceType.IMAGE
        )

        assert isinstance(source.origin, UrlOrigin)
        assert source.identifier == "https://example.com/a.png"
        assert source.url == "https://example.com/a.png"
        assert source.is_external is True
        assert source.tags == ("x",)
        assert source.folder == "imports"

    @pytest.mark.asyncio
    async def test_from_future_buffer(self, payload):
        async def load():
            await asyncio.sleep(0)
            return payload

        source = await UploadSource.from_future_buffer(load(), identifier="later.bin")

        assert await source.read_full() == payload

    def test_missing_origin(self):
        with pytest.raises(InvalidSourceError):
            UploadSource(origin=None, identifier="x")

    def test_empty_identifier(self):
        with pytest.raises(InvalidSourceError):
            UploadSource.from_buffer(b"abc", identifier="")

    def test_tags_normalized_to_tuple(self):
        source = UploadSource.from_buffer(b"abc", identifier="a", tags=["b", "a", "b"])

        assert source.tags == ("b", "a", "b")

    def test_resource_type_from_string(self):
        source = UploadSource.from_buffer(b"abc", identifier="a", resource_type="raw")

        assert source.resource_type is ResourceType.RAW

    def test_immutable(self, buffer_source):
        with pytest.raises(AttributeError):
            buffer_source.identifier = "other"


class TestByteSize:
    """Test suite for size queries."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fixture_name", LOCAL_SOURCES)
    async def test_size(self, request, fixture_name, payload):
        source = request.getfixturevalue(fixture_name)

        assert await source.byte_size() == len(payload)
        assert await source.byte_size() == len(payload)

    @pytest.mark.asyncio
    async def test_url_size_is_zero(self, url_source):
        assert await url_source.byte_size() == 0

    @pytest.mark.asyncio
    async def test_memoryview_buffer(self):
        source = UploadSource.from_buffer(memoryview(bytearray(b"hello")), identifier="m")

        assert await source.byte_size() == 5
        assert await source.read_range(1, 4) == b"ell"

    @pytest.mark.asyncio
    async def test_path_size_not_cached(self, temp_file, payload):
        source = UploadSource.from_file(temp_file)
        assert await source.byte_size() == len(payload)

        with open(temp_file, 'ab') as f:
            f.write(b"more")

        assert await source.byte_size() == len(payload) + 4

    @pytest.mark.asyncio
    async def test_missing_path_fails_loudly(self):
        source = UploadSource.from_file("/nonexistent/file.bin")

        with pytest.raises(FileNotFoundError):
            await source.byte_size()


class TestReads:
    """Test suite for full and range reads."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fixture_name", LOCAL_SOURCES)
    async def test_read_full(self, request, fixture_name, payload):
        source = request.getfixturevalue(fixture_name)

        assert await source.read_full() == payload

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fixture_name", LOCAL_SOURCES)
    async def test_read_range(self, request, fixture_name, payload):
        source = request.getfixturevalue(fixture_name)

        assert await source.read_range(0, 10) == payload[0:10]
        assert await source.read_range(100, 250) == payload[100:250]
        assert await source.read_range(100, 250) == payload[100:250]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fixture_name", LOCAL_SOURCES)
    async def test_reversed_range(self, request, fixture_name):
        source = request.getfixturevalue(fixture_name)

        with pytest.raises(InvalidRangeError):
            await source.read_range(50, 10)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fixture_name", LOCAL_SOURCES)
    async def test_range_past_end(self, request, fixture_name):
        source = request.getfixturevalue(fixture_name)

        with pytest.raises(InvalidRangeError):
            await source.read_range(200, 251)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fixture_name", LOCAL_SOURCES)
    async def test_negative_start(self, request, fixture_name):
        source = request.getfixturevalue(fixture_name)

        with pytest.raises(InvalidRangeError):
            await source.read_range(-1, 10)

    @pytest.mark.asyncio
    async def test_url_reads_fail(self, url_source):
        with pytest.raises(InvalidOperationError):
            await url_source.read_full()

        with pytest.raises(InvalidOperationError):
            await url_source.read_range(0, 10)

    @pytest.mark.asyncio
    async def test_url_reversed_range(self, url_source):
        """Malformed ranges fail the same way for external sources."""
        with pytest.raises(InvalidRangeError):
            await url_source.read_range(50, 10)

    @pytest.mark.asyncio
    async def test_stream_range_pieces(self, path_source, payload):
        pieces = []
        async for piece in path_source.stream_range(10, 200, piece_size=64):
            pieces.append(piece)

        assert [len(p) for p in pieces] == [64, 64, 62]
        assert b"".join(pieces) == payload[10:200]

    @pytest.mark.asyncio
    async def test_missing_file_read(self):
        source = UploadSource.from_file("/nonexistent/file.bin")

        with pytest.raises(FileNotFoundError):
            await source.read_full()


class TestDescribeMetadata:
    """Test suite for describe_metadata."""

    def test_minimal(self, buffer_source):
        assert buffer_source.describe_metadata("preset") == {'upload_preset': 'preset'}

    def test_full(self):
        source = UploadSource.from_file(
            "photo.jpg",
            public_id="me/avatar",
            folder="people",
            tags=["a", "b"],
            context={"alt": "cat", "caption": "hi"}
        )

        assert source.to_form_data("preset") == {
            'upload_preset': 'preset',
            'public_id': 'me/avatar',
            'folder': 'people',
            'tags': 'a,b',
            'context': 'alt=cat|caption=hi',
        }

    def test_url_source_fields(self, url_source):
        form = url_source.describe_metadata("preset")

        assert 'file' not in form
        assert form == {'upload_preset': 'preset'}
