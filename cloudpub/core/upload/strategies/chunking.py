"""
Chunking strategies for file uploads.

Implements Strategy Pattern for chunking algorithms.
Open for extension (new strategies), closed for modification.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ChunkRange


def plan_chunks(total_size: int, max_chunk_size: int) -> List[ChunkRange]:
    """
    Split ``[0, total_size)`` into contiguous ranges of at most
    ``max_chunk_size`` bytes.

    The chunk count is ``ceil(total_size / max_chunk_size)``; only the last
    chunk may be shorter and none is empty. An empty source yields no
    chunks. The result is a pure function of its arguments, so a single
    chunk can be recomputed by index when resuming.

    Args:
        total_size: Total size in bytes
        max_chunk_size: Maximum chunk size in bytes

    Returns:
        Ranges in increasing order

    Raises:
        ValueError: If ``max_chunk_size`` is not positive or ``total_size``
            is negative
    """
    if max_chunk_size <= 0:
        raise ValueError("Chunk size must be positive")
    if total_size < 0:
        raise ValueError("Total size must not be negative")

    count = -(-total_size // max_chunk_size)
    chunks = []
    for index in range(count):
        start = index * max_chunk_size
        end = min(total_size, start + max_chunk_size)
        chunks.append(ChunkRange(start, end))
    return chunks


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, file_size: int) -> List[ChunkRange]:
        """Calculate chunk boundaries."""
        pass


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking strategy.

    Every chunk is ``chunk_size`` bytes except possibly the last one.
    """

    DEFAULT_CHUNK_SIZE = 20_000_000  # 20MB

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def calculate_chunks(self, file_size: int) -> List[ChunkRange]:
        """
        Calculate fixed-size chunk boundaries.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of ranges
        """
        return plan_chunks(file_size, self.chunk_size)
