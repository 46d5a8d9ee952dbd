"""
Upload facade.

Provides a simplified interface for uploads.
Follows Facade Pattern - hides the transport and chunking subsystems.
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

import aiohttp

from ..config import UploadConfig
from .coordinator import UploadCoordinator
from .protocols import ChunkingStrategy
from .services import UploadTransport
from .source import UploadSource
from .strategies import FixedSizeChunkingStrategy


class UploadFacade:
    """
    Simplified interface for unsigned uploads.

    This is the main entry point for uploading sources.

    Example:
        >>> from cloudpub import UploadFacade, UploadSource
        >>> async with UploadFacade.create("demo", "unsigned_preset") as uploader:
        ...     result = await uploader.upload_file(UploadSource.from_file("cat.jpg"))
        ...     print(result.get("secure_url"))
    """

    def __init__(
        self,
        config: UploadConfig,
        session: Optional[aiohttp.ClientSession] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None
    ):
        """
        Initialize upload facade.

        Args:
            config: Upload configuration
            session: Optional shared aiohttp session
            chunking_strategy: Optional custom chunking strategy
        """
        self._config = config
        self._logger = logging.getLogger('cloudpub.upload')
        self._logger.setLevel(config.log_level)

        self._transport = UploadTransport(config, session=session)
        self._coordinator = UploadCoordinator(
            transport=self._transport,
            upload_preset=config.upload_preset,
            chunking_strategy=chunking_strategy or FixedSizeChunkingStrategy(config.chunk_size),
            logger=self._logger
        )

    @classmethod
    def create(cls, cloud_name: str, upload_preset: str, **kwargs) -> 'UploadFacade':
        """Create a facade from a cloud name and upload preset."""
        return cls(UploadConfig(cloud_name=cloud_name, upload_preset=upload_preset, **kwargs))

    @property
    def config(self) -> UploadConfig:
        """Returns the upload configuration."""
        return self._config

    async def __aenter__(self) -> 'UploadFacade':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._transport.close()

    async def upload_file(
        self,
        source: UploadSource,
        upload_preset: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Upload a source in a single request.

        Args:
            source: Source to upload
            upload_preset: Overrides the configured upload preset

        Returns:
            Decoded JSON response
        """
        return await self._coordinator.upload(source, upload_preset)

    async def upload_file_in_chunks(
        self,
        source: UploadSource,
        upload_preset: Optional[str] = None,
        chunk_size: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Upload a source in sequential chunks.

        Sources no larger than ``chunk_size`` go out in a single request.

        Args:
            source: Source to upload
            upload_preset: Overrides the configured upload preset
            chunk_size: Overrides the configured chunk size

        Returns:
            Decoded JSON response of the last chunk
        """
        return await self._coordinator.upload_in_chunks(source, upload_preset, chunk_size)

    async def upload_files(
        self,
        sources: Iterable[UploadSource],
        upload_preset: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Upload several independent sources concurrently.

        Each source goes out in a single request; results keep input order.
        """
        return await asyncio.gather(
            *(self.upload_file(source, upload_preset) for source in sources)
        )
