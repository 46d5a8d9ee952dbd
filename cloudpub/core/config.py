"""
Upload configuration module.

Provides configuration for the upload transport and the chunking policy.
Open for extension through custom configurations.
"""
import os
import ssl
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union

DEFAULT_API_BASE_URL = 'https://api.cloudinary.com/v1_1'
DEFAULT_CHUNK_SIZE = 20_000_000  # 20MB


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration (``False`` disables checks)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        context.check_hostname = self.check_hostname
        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Chunk posts can be large, so the total budget is generous.
    """
    total: float = 600.0
    connect: float = 30.0
    sock_read: float = 120.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class UploadConfig:
    """
    Complete upload configuration.

    Attributes:
        cloud_name: Account cloud name (first path segment of the endpoint)
        upload_preset: Default unsigned upload preset
        api_base_url: Endpoint base URL
        chunk_size: Maximum bytes per chunk for chunked uploads
        user_agent: User-Agent header value
        extra_headers: Additional headers sent with every request
        timeout: Request timeouts
        ssl: TLS settings
        log_level: Level applied to the ``cloudpub.upload`` logger
    """
    cloud_name: str
    upload_preset: str
    api_base_url: str = DEFAULT_API_BASE_URL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    user_agent: str = 'cloudpub/1.0.0'
    extra_headers: Dict[str, str] = field(default_factory=dict)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    ssl: SSLConfig = field(default_factory=SSLConfig)
    log_level: int = logging.INFO

    def __post_init__(self):
        if not self.cloud_name:
            raise ValueError("cloud_name is required")
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.api_base_url = self.api_base_url.rstrip('/')

    @classmethod
    def from_env(cls, **kwargs) -> 'UploadConfig':
        """
        Create configuration from environment variables.

        Reads ``CLOUDINARY_CLOUD_NAME``, ``CLOUDINARY_UPLOAD_PRESET`` and
        ``CLOUDPUB_CHUNK_SIZE``. Explicit keyword arguments win.
        """
        values: Dict[str, Any] = {
            'cloud_name': os.environ.get('CLOUDINARY_CLOUD_NAME', ''),
            'upload_preset': os.environ.get('CLOUDINARY_UPLOAD_PRESET', ''),
        }
        chunk_size = os.environ.get('CLOUDPUB_CHUNK_SIZE')
        if chunk_size:
            values['chunk_size'] = int(chunk_size)
        values.update({k: v for k, v in kwargs.items() if v is not None})
        return cls(**values)

    def upload_url(self, resource_type: Any = 'auto') -> str:
        """Build the upload endpoint URL for a resource type (enum or str)."""
        segment = getattr(resource_type, 'value', resource_type)
        return f"{self.api_base_url}/{self.cloud_name}/{segment}/upload"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': 10,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
