"""Tests for upload configuration."""
import aiohttp
import pytest

from cloudpub.core.config import UploadConfig, SSLConfig, TimeoutConfig
from cloudpub.core.upload.models import ResourceType


class TestUploadConfig:
    """Test suite for UploadConfig."""

    def test_defaults(self):
        config = UploadConfig(cloud_name="demo", upload_preset="unsigned")

        assert config.chunk_size == 20_000_000
        assert config.api_base_url == "https://api.cloudinary.com/v1_1"

    def test_upload_url(self):
        config = UploadConfig(cloud_name="demo", upload_preset="unsigned")

        assert config.upload_url() == "https://api.cloudinary.com/v1_1/demo/auto/upload"
        assert config.upload_url(ResourceType.RAW) == "https://api.cloudinary.com/v1_1/demo/raw/upload"

    def test_trailing_slash_stripped(self):
        config = UploadConfig(cloud_name="demo", upload_preset="p", api_base_url="http://localhost/")

        assert config.upload_url("image") == "http://localhost/demo/image/upload"

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            UploadConfig(cloud_name="demo", upload_preset="p", chunk_size=0)

    def test_missing_cloud_name(self):
        with pytest.raises(ValueError):
            UploadConfig(cloud_name="", upload_preset="p")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "envcloud")
        monkeypatch.setenv("CLOUDINARY_UPLOAD_PRESET", "envpreset")
        monkeypatch.setenv("CLOUDPUB_CHUNK_SIZE", "6000000")

        config = UploadConfig.from_env()

        assert config.cloud_name == "envcloud"
        assert config.upload_preset == "envpreset"
        assert config.chunk_size == 6_000_000

    def test_from_env_kwargs_win(self, monkeypatch):
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "envcloud")
        monkeypatch.delenv("CLOUDPUB_CHUNK_SIZE", raising=False)

        config = UploadConfig.from_env(cloud_name="explicit", upload_preset="p")

        assert config.cloud_name == "explicit"

    def test_session_kwargs(self):
        config = UploadConfig(
            cloud_name="demo", upload_preset="p", extra_headers={"X-Test": "1"}
        )

        kwargs = config.get_session_kwargs()

        assert kwargs['headers']['User-Agent'].startswith("cloudpub/")
        assert kwargs['headers']['X-Test'] == "1"
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)


class TestSSLConfig:
    """Test suite for SSLConfig."""

    def test_insecure(self):
        assert SSLConfig(verify=False).create_ssl_context() is False

    def test_default_context(self):
        context = SSLConfig().create_ssl_context()

        assert context.check_hostname is True


class TestTimeoutConfig:
    """Test suite for TimeoutConfig."""

    def test_to_aiohttp(self):
        timeout = TimeoutConfig(total=10, connect=2).to_aiohttp_timeout()

        assert timeout.total == 10
        assert timeout.connect == 2
