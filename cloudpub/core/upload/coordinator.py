"""
Upload coordinator.

Orchestrates the upload process using injected dependencies.
Follows Dependency Inversion Principle - depends on abstractions, not concretions.
"""
import time
import uuid
from typing import Any, Dict, Optional

from ..logging import get_logger
from .protocols import ChunkingStrategy, LoggerProtocol, UploadTransportProtocol
from .services import ChunkMaterializer
from .source import UploadSource
from .strategies import FixedSizeChunkingStrategy


class UploadCoordinator:
    """
    Coordinates single and chunked uploads of one source.

    Routing:
    - External URL sources are sent as a URL reference
    - Empty sources and sources no larger than the chunk size are sent
      in a single multipart request
    - Larger sources are sent as sequential chunks sharing one upload id

    Chunks are sent strictly in increasing range order.
    """

    def __init__(
        self,
        transport: UploadTransportProtocol,
        upload_preset: str,
        chunking_strategy: Optional[ChunkingStrategy] = None,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            transport: Transport that performs the HTTP requests
            upload_preset: Default upload preset
            chunking_strategy: Strategy for chunking sources
            logger: Logger instance
        """
        self._transport = transport
        self._upload_preset = upload_preset
        self._chunking = chunking_strategy or FixedSizeChunkingStrategy()
        self._materializer = ChunkMaterializer(self._chunking)
        self._logger = logger or get_logger('upload.coordinator')

    @property
    def chunk_size(self) -> Optional[int]:
        """Chunk size of the active strategy, if it has one."""
        return getattr(self._chunking, 'chunk_size', None)

    async def upload(
        self,
        source: UploadSource,
        upload_preset: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Upload a source in a single request.

        Args:
            source: Source to upload
            upload_preset: Overrides the default upload preset

        Returns:
            Decoded JSON response
        """
        form = source.describe_metadata(upload_preset or self._upload_preset)

        if source.is_external:
            self._logger.info(f"Uploading from external URL: {source.url}")
            return await self._transport.send_url(source.resource_type, form, source.url)

        content = await source.read_full()
        size_mb = len(content) / (1024 * 1024)
        self._logger.info(f"Uploading {source.identifier} ({size_mb:.2f} MB) in a single request")
        return await self._transport.send_file(
            source.resource_type, form, source.identifier, content
        )

    async def upload_in_chunks(
        self,
        source: UploadSource,
        upload_preset: Optional[str] = None,
        chunk_size: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Upload a source as sequential byte-range chunks.

        Falls back to a single request for external, empty or small sources.

        Args:
            source: Source to upload
            upload_preset: Overrides the default upload preset
            chunk_size: Overrides the strategy's chunk size

        Returns:
            Decoded JSON response of the last request
        """
        if source.is_external:
            return await self.upload(source, upload_preset)

        total_size = await source.byte_size()
        max_chunk_size = chunk_size or self.chunk_size
        if total_size == 0 or (max_chunk_size is not None and total_size <= max_chunk_size):
            return await self.upload(source, upload_preset)

        parts = await self._materializer.create_chunks(source, max_chunk_size)
        form = source.describe_metadata(upload_preset or self._upload_preset)
        upload_id = uuid.uuid4().hex

        self._logger.info(
            f"Uploading {source.identifier} ({total_size} bytes) in "
            f"{len(parts)} chunks, upload id {upload_id}"
        )

        started = time.time()
        response: Dict[str, Any] = {}
        for index, part in enumerate(parts):
            response = await self._transport.send_chunk(
                source.resource_type, form, part, upload_id, total_size
            )
            self._logger.debug(f"Chunk {index + 1}/{len(parts)} sent ({part.length} bytes)")

        self._logger.info(f"Chunked upload of {source.identifier} finished in {time.time() - started:.2f}s")
        return response
