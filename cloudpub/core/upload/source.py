"""
Upload sources.

An ``UploadSource`` describes one thing to be uploaded together with its
descriptive metadata. Its ``origin`` is a closed union of four variants:

- ``BufferOrigin``: an in-memory buffer (bytes, bytearray, memoryview)
- ``BytesOrigin``: a raw sequence of byte values
- ``PathOrigin``: a file on disk, read lazily and in bounded ranges
- ``UrlOrigin``: a pre-hosted external URL with no local bytes

Every variant implements the ``SourceOrigin`` protocol, so operations on the
source never branch on the origin kind.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import (
    Any, AsyncIterator, Awaitable, Dict, Iterable, Mapping, Optional,
    Sequence, Tuple, Union
)

from ..exceptions import InvalidOperationError, InvalidRangeError, InvalidSourceError
from .models import ChunkRange, ChunkPart, ResourceType, DEFAULT_PIECE_SIZE
from .services.file_service import AsyncFileReader
from .services.form_service import build_form_data

BufferLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class BufferOrigin:
    """In-memory buffer origin."""
    data: BufferLike = field(repr=False)

    is_external = False

    def _view(self) -> memoryview:
        return memoryview(self.data).cast('B')

    async def size(self) -> int:
        return self._view().nbytes

    async def read(self) -> bytes:
        return self._view().tobytes()

    async def read_range(self, start: int, end: int) -> bytes:
        return self._view()[start:end].tobytes()

    async def stream_range(self, start: int, end: int, piece_size: int) -> AsyncIterator[bytes]:
        yield await self.read_range(start, end)


@dataclass(frozen=True)
class BytesOrigin:
    """Raw byte-value sequence origin (e.g. a list of ints)."""
    data: Sequence[int] = field(repr=False)

    is_external = False

    async def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        return bytes(self.data)

    async def read_range(self, start: int, end: int) -> bytes:
        return bytes(self.data[start:end])

    async def stream_range(self, start: int, end: int, piece_size: int) -> AsyncIterator[bytes]:
        yield await self.read_range(start, end)


@dataclass(frozen=True)
class PathOrigin:
    """
    Filesystem path origin.

    Size is queried from disk on every call. Reads open a handle scoped to
    the single call.
    """
    path: Path
    reader: AsyncFileReader = field(default_factory=AsyncFileReader, repr=False, compare=False)

    is_external = False

    async def size(self) -> int:
        return await self.reader.file_size(self.path)

    async def read(self) -> bytes:
        return await self.reader.read_file(self.path)

    async def read_range(self, start: int, end: int) -> bytes:
        return await self.reader.read_range(self.path, start, end)

    async def stream_range(self, start: int, end: int, piece_size: int) -> AsyncIterator[bytes]:
        async for piece in self.reader.stream_range(self.path, start, end, piece_size):
            yield piece


@dataclass(frozen=True)
class UrlOrigin:
    """External URL origin; carries no local bytes."""
    url: str

    is_external = True

    async def size(self) -> int:
        return 0

    async def read(self) -> bytes:
        raise InvalidOperationError(f"Cannot read bytes of external URL {self.url}")

    async def read_range(self, start: int, end: int) -> bytes:
        raise InvalidOperationError(f"Cannot read a range of external URL {self.url}")

    async def stream_range(self, start: int, end: int, piece_size: int) -> AsyncIterator[bytes]:
        raise InvalidOperationError(f"Cannot stream external URL {self.url}")
        yield b''  # pragma: no cover


Origin = Union[BufferOrigin, BytesOrigin, PathOrigin, UrlOrigin]
ORIGIN_TYPES = (BufferOrigin, BytesOrigin, PathOrigin, UrlOrigin)


@dataclass(frozen=True)
class UploadSource:
    """
    A thing to be uploaded.

    Attributes:
        origin: Where the bytes (or URL) come from
        identifier: Filename transmitted with the upload
        public_id: Optional destination asset name
        folder: Optional folder the asset is stored under
        tags: Optional tags, order preserved
        context: Optional key/value contextual metadata, insertion order preserved
        resource_type: Classification hint for the endpoint

    Example:
        >>> source = UploadSource.from_bytes([1, 2, 3], identifier="blob.bin")
        >>> await source.byte_size()
        3
    """
    origin: Origin
    identifier: str
    public_id: Optional[str] = None
    folder: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    context: Optional[Dict[str, Any]] = None
    resource_type: ResourceType = ResourceType.AUTO

    def __post_init__(self):
        if not isinstance(self.origin, ORIGIN_TYPES):
            raise InvalidSourceError(
                f"Upload source needs a buffer, bytes, path or URL origin, "
                f"got {type(self.origin).__name__}"
            )
        if not self.identifier:
            raise InvalidSourceError("Upload source needs a non-empty identifier")
        if self.tags is not None:
            object.__setattr__(self, 'tags', tuple(self.tags))
        if self.context is not None:
            object.__setattr__(self, 'context', dict(self.context))
        if not isinstance(self.resource_type, ResourceType):
            object.__setattr__(self, 'resource_type', ResourceType(self.resource_type))

    # Factories

    @classmethod
    def from_buffer(
        cls,
        data: BufferLike,
        *,
        identifier: str,
        public_id: Optional[str] = None,
        resource_type: ResourceType = ResourceType.AUTO,
        tags: Optional[Iterable[str]] = None,
        folder: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None
    ) -> 'UploadSource':
        """Create a source from an in-memory buffer."""
        return cls(
            origin=BufferOrigin(data),
            identifier=identifier,
            public_id=public_id,
            folder=folder,
            tags=tags,
            context=context,
            resource_type=resource_type,
        )

    @classmethod
    async def from_future_buffer(
        cls,
        data: Awaitable[BufferLike],
        *,
        identifier: str,
        public_id: Optional[str] = None,
        resource_type: ResourceType = ResourceType.AUTO,
        tags: Optional[Iterable[str]] = None,
        folder: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None
    ) -> 'UploadSource':
        """Await a buffer, then create a source from it."""
        return cls.from_buffer(
            await data,
            identifier=identifier,
            public_id=public_id,
            resource_type=resource_type,
            tags=tags,
            folder=folder,
            context=context,
        )

    @classmethod
    def from_bytes(
        cls,
        data: Sequence[int],
        *,
        identifier: str,
        public_id: Optional[str] = None,
        resource_type: ResourceType = ResourceType.AUTO,
        tags: Optional[Iterable[str]] = None,
        folder: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None
    ) -> 'UploadSource':
        """Create a source from a raw sequence of byte values."""
        return cls(
            origin=BytesOrigin(data),
            identifier=identifier,
            public_id=public_id,
            folder=folder,
            tags=tags,
            context=context,
            resource_type=resource_type,
        )

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        *,
        identifier: Optional[str] = None,
        public_id: Optional[str] = None,
        resource_type: ResourceType = ResourceType.AUTO,
        tags: Optional[Iterable[str]] = None,
        folder: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None
    ) -> 'UploadSource':
        """
        Create a source from a file path.

        The identifier defaults to the final path segment. The file is not
        touched until its size or content is requested.
        """
        path = Path(path) if isinstance(path, str) else path
        return cls(
            origin=PathOrigin(path),
            identifier=identifier or path.name,
            public_id=public_id,
            folder=folder,
            tags=tags,
            context=context,
            resource_type=resource_type,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        public_id: Optional[str] = None,
        resource_type: ResourceType = ResourceType.AUTO,
        tags: Optional[Iterable[str]] = None,
        folder: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None
    ) -> 'UploadSource':
        """Create a source referencing a pre-hosted URL; the identifier is the URL."""
        return cls(
            origin=UrlOrigin(url),
            identifier=url,
            public_id=public_id,
            folder=folder,
            tags=tags,
            context=context,
            resource_type=resource_type,
        )

    # Queries

    @property
    def is_external(self) -> bool:
        """True if the source is an external URL reference."""
        return self.origin.is_external

    @property
    def url(self) -> Optional[str]:
        """The external URL, or None for byte-backed sources."""
        return self.origin.url if isinstance(self.origin, UrlOrigin) else None

    async def byte_size(self) -> int:
        """
        Current size in bytes (0 for external URLs).

        Path-backed sources are queried on every call; errors propagate.
        """
        return await self.origin.size()

    async def read_full(self) -> bytes:
        """
        Read the complete content.

        Raises:
            InvalidOperationError: If the source is an external URL
        """
        self._ensure_local('read_full')
        return await self.origin.read()

    async def read_range(self, start: int, end: int) -> bytes:
        """
        Read ``[start, end)``.

        Raises:
            InvalidOperationError: If the source is an external URL
            InvalidRangeError: If the range is malformed or exceeds the size
        """
        ChunkRange(start, end)  # malformed ranges fail for every origin
        self._ensure_local('read_range')
        await self._check_bounds(start, end)
        return await self.origin.read_range(start, end)

    async def stream_range(
        self,
        start: int,
        end: int,
        piece_size: int = DEFAULT_PIECE_SIZE
    ) -> AsyncIterator[bytes]:
        """Lazily iterate over ``[start, end)``; validation runs on first iteration."""
        ChunkRange(start, end)  # malformed ranges fail for every origin
        self._ensure_local('stream_range')
        await self._check_bounds(start, end)
        async for piece in self.origin.stream_range(start, end, piece_size):
            yield piece

    def describe_metadata(self, upload_preset: str) -> Dict[str, str]:
        """Flat form fields describing this source for the upload endpoint."""
        return build_form_data(self, upload_preset)

    to_form_data = describe_metadata

    def to_part(self, chunk_range: ChunkRange) -> ChunkPart:
        """Bind a lazily read part to ``chunk_range`` of this source."""
        self._ensure_local('to_part')
        return ChunkPart(filename=self.identifier, range=chunk_range, source=self)

    # Helpers

    def _ensure_local(self, operation: str) -> None:
        if self.is_external:
            raise InvalidOperationError(
                f"{operation}() is not available for external URL sources"
            )

    async def _check_bounds(self, start: int, end: int) -> None:
        size = await self.byte_size()
        if end > size:
            raise InvalidRangeError(
                f"Range [{start}, {end}) exceeds source size {size}",
                start=start, end=end
            )
