"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator

from ...exceptions import InvalidRangeError

DEFAULT_PIECE_SIZE = 64 * 1024  # 64KB


class ResourceType(str, Enum):
    """
    Classification hint sent to the upload endpoint.

    The value is the endpoint path segment.
    """
    AUTO = 'auto'
    IMAGE = 'image'
    VIDEO = 'video'
    RAW = 'raw'


@dataclass(frozen=True)
class ChunkRange:
    """
    Half-open byte range ``[start, end)`` of a source.

    Attributes:
        start: Start position in bytes (inclusive)
        end: End position in bytes (exclusive)
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise InvalidRangeError(
                f"Range start must be non-negative, got {self.start}",
                start=self.start, end=self.end
            )
        if self.end <= self.start:
            raise InvalidRangeError(
                f"Range end must be greater than start, got [{self.start}, {self.end})",
                start=self.start, end=self.end
            )

    @property
    def size(self) -> int:
        """Returns range size in bytes."""
        return self.end - self.start

    @property
    def content_range(self) -> str:
        """Inclusive ``start-last`` form used by Content-Range headers."""
        return f"{self.start}-{self.end - 1}"


@dataclass(frozen=True)
class ChunkPart:
    """
    Named, sized, lazily readable slice of an upload source.

    Holds a non-owning reference to the source; nothing is read until
    ``stream()`` or ``read()`` is awaited.

    Attributes:
        filename: Filename transmitted with the part
        range: Byte range of the source covered by this part
        source: Source the bytes are read from
    """
    filename: str
    range: ChunkRange
    source: Any = field(repr=False, compare=False)

    @property
    def length(self) -> int:
        """Declared part length in bytes."""
        return self.range.size

    def stream(self, piece_size: int = DEFAULT_PIECE_SIZE) -> AsyncIterator[bytes]:
        """Iterate over the part content in pieces of at most ``piece_size`` bytes."""
        return self.source.stream_range(self.range.start, self.range.end, piece_size)

    async def read(self) -> bytes:
        """Read the whole part into memory."""
        pieces = []
        async for piece in self.stream():
            pieces.append(piece)
        return b''.join(pieces)
