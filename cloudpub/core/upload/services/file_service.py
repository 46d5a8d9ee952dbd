"""
File reading services.

Bounded, range-scoped reads of path-backed sources.
"""
from pathlib import Path
from typing import AsyncIterator, Union
import logging

import aiofiles
import aiofiles.os

from ...exceptions import InvalidRangeError

PathLike = Union[str, Path]


class AsyncFileReader:
    """
    Asynchronous file reader for range-based reading.

    Uses aiofiles for non-blocking I/O operations. Every call opens its own
    handle inside ``async with`` so the handle is released on every exit
    path, including validation and I/O failures.

    I/O errors (missing file, permission denied) propagate unmodified.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('cloudpub.upload.file')

    async def file_size(self, file_path: PathLike) -> int:
        """
        Query the current on-disk size of a file.

        Args:
            file_path: Path to the file

        Returns:
            File size in bytes

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        stat = await aiofiles.os.stat(file_path)
        return stat.st_size

    async def read_range(self, file_path: PathLike, start: int, end: int) -> bytes:
        """
        Read exactly ``[start, end)`` from a file.

        Args:
            file_path: Path to the file
            start: Start position in bytes
            end: End position in bytes (exclusive)

        Returns:
            Range data

        Raises:
            InvalidRangeError: If the file ended before ``end``
        """
        expected = end - start
        async with aiofiles.open(file_path, 'rb') as f:
            await f.seek(start)
            data = await f.read(expected)

        if len(data) != expected:
            raise InvalidRangeError(
                f"Short read on {file_path}: expected {expected} bytes at "
                f"{start}, got {len(data)}",
                start=start, end=end
            )
        self._logger.debug(f"Read range: {start}-{end} ({len(data)} bytes)")
        return data

    async def stream_range(
        self,
        file_path: PathLike,
        start: int,
        end: int,
        piece_size: int
    ) -> AsyncIterator[bytes]:
        """
        Stream ``[start, end)`` from a file in pieces.

        Only one piece is held in memory at a time.

        Args:
            file_path: Path to the file
            start: Start position in bytes
            end: End position in bytes (exclusive)
            piece_size: Maximum bytes per yielded piece

        Yields:
            Range data pieces

        Raises:
            InvalidRangeError: If the file ended before ``end``
        """
        remaining = end - start
        async with aiofiles.open(file_path, 'rb') as f:
            await f.seek(start)
            while remaining > 0:
                piece = await f.read(min(piece_size, remaining))
                if not piece:
                    raise InvalidRangeError(
                        f"Short read on {file_path}: file ended "
                        f"{remaining} bytes before {end}",
                        start=start, end=end
                    )
                remaining -= len(piece)
                yield piece
        self._logger.debug(f"Streamed range: {start}-{end}")

    async def read_file(self, file_path: PathLike) -> bytes:
        """
        Read entire file.

        Args:
            file_path: Path to the file

        Returns:
            File data
        """
        async with aiofiles.open(file_path, 'rb') as f:
            return await f.read()
