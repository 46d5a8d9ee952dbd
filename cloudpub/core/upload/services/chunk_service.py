"""
Chunk materialization service.

Turns planned byte ranges into lazily readable parts.
"""
from typing import List, Optional, TYPE_CHECKING
import logging

from ...exceptions import InvalidOperationError
from ..models import ChunkPart, ChunkRange
from ..protocols import ChunkingStrategy
from ..strategies import FixedSizeChunkingStrategy

if TYPE_CHECKING:
    from ..source import UploadSource


class ChunkMaterializer:
    """
    Builds ``ChunkPart`` objects for an upload source.

    Responsibilities:
    - Refuse to slice external URL sources
    - Bind each planned range to a lazily read part
    - Plan and materialize all chunks of a source in order

    Materializing reads nothing; bytes are read when the part is consumed.
    """

    def __init__(self, chunking_strategy: Optional[ChunkingStrategy] = None):
        """
        Initialize materializer.

        Args:
            chunking_strategy: Strategy used by ``create_chunks``
        """
        self._chunking = chunking_strategy or FixedSizeChunkingStrategy()
        self._logger = logging.getLogger('cloudpub.upload.chunk')

    def materialize(self, source: 'UploadSource', chunk_range: ChunkRange) -> ChunkPart:
        """
        Bind ``chunk_range`` of ``source`` to a part.

        Args:
            source: Upload source
            chunk_range: Range to cover

        Returns:
            Part whose length equals the range size

        Raises:
            InvalidOperationError: If the source is an external URL
        """
        if source.is_external:
            raise InvalidOperationError(
                "Chunking is not available for external URL sources"
            )
        return source.to_part(chunk_range)

    async def create_chunks(
        self,
        source: 'UploadSource',
        max_chunk_size: Optional[int] = None
    ) -> List[ChunkPart]:
        """
        Plan and materialize every chunk of ``source``.

        Args:
            source: Upload source
            max_chunk_size: Overrides the strategy's chunk size

        Returns:
            Parts in increasing range order
        """
        if source.is_external:
            raise InvalidOperationError(
                "Chunking is not available for external URL sources"
            )
        strategy = (
            FixedSizeChunkingStrategy(max_chunk_size)
            if max_chunk_size is not None else self._chunking
        )
        total_size = await source.byte_size()
        ranges = strategy.calculate_chunks(total_size)
        self._logger.debug(
            f"Planned {len(ranges)} chunks for {source.identifier} ({total_size} bytes)"
        )
        return [self.materialize(source, chunk_range) for chunk_range in ranges]


_default_materializer = ChunkMaterializer()


def materialize(source: 'UploadSource', chunk_range: ChunkRange) -> ChunkPart:
    """Module-level shortcut for ``ChunkMaterializer().materialize``."""
    return _default_materializer.materialize(source, chunk_range)


async def create_chunks(source: 'UploadSource', max_chunk_size: int) -> List[ChunkPart]:
    """Module-level shortcut for ``ChunkMaterializer().create_chunks``."""
    return await _default_materializer.create_chunks(source, max_chunk_size)
