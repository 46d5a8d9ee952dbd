"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, Dict, Any, List, Optional, AsyncIterator

from .models import ChunkRange, ChunkPart, ResourceType


class ChunkingStrategy(Protocol):
    """
    Protocol for chunking strategies.

    Allows different chunking algorithms to be plugged in.
    """

    def calculate_chunks(self, file_size: int) -> List[ChunkRange]:
        """
        Calculate chunk boundaries for a source.

        Args:
            file_size: Total size in bytes

        Returns:
            Contiguous ranges in increasing order
        """
        ...


class SourceOrigin(Protocol):
    """Protocol implemented by every upload source origin."""

    is_external: bool

    async def size(self) -> int:
        """Current size in bytes."""
        ...

    async def read(self) -> bytes:
        """Complete content."""
        ...

    async def read_range(self, start: int, end: int) -> bytes:
        """Content of ``[start, end)``; bounds are already validated."""
        ...

    def stream_range(self, start: int, end: int, piece_size: int) -> AsyncIterator[bytes]:
        """Content of ``[start, end)`` in pieces."""
        ...


class UploadTransportProtocol(Protocol):
    """Protocol for the network side of an upload."""

    async def send_file(
        self,
        resource_type: ResourceType,
        form: Dict[str, str],
        filename: str,
        content: bytes
    ) -> Dict[str, Any]:
        """Post a whole file with its form fields."""
        ...

    async def send_url(
        self,
        resource_type: ResourceType,
        form: Dict[str, str],
        url: str
    ) -> Dict[str, Any]:
        """Post an external URL reference with its form fields."""
        ...

    async def send_chunk(
        self,
        resource_type: ResourceType,
        form: Dict[str, str],
        part: ChunkPart,
        upload_id: str,
        total_size: int
    ) -> Dict[str, Any]:
        """Post one chunk of a chunked upload."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
