"""
Upload transport service.

Posts parts and form fields to the upload endpoint. Responses are returned
as decoded JSON without further interpretation.
"""
from typing import Any, Dict, Optional
import logging
import time

import aiohttp

from ...config import UploadConfig
from ...exceptions import UploadRequestError
from ..models import ChunkPart, ResourceType

UPLOAD_ID_HEADER = 'X-Unique-Upload-Id'
CONTENT_RANGE_HEADER = 'Content-Range'


class UploadTransport:
    """
    Handles HTTP requests to the upload endpoint.

    Reuses one HTTP session for every request of an upload.

    Responsibilities:
    - Build multipart forms from metadata and content
    - Add chunked-upload headers
    - Surface HTTP errors as ``UploadRequestError``
    """

    def __init__(
        self,
        config: UploadConfig,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            config: Upload configuration
            session: Optional shared session
        """
        self._config = config
        self._session = session
        self._owns_session = False
        self._logger = logging.getLogger('cloudpub.upload.transport')

    @property
    def config(self) -> UploadConfig:
        """Returns the upload configuration."""
        return self._config

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    @staticmethod
    def _build_form(form: Dict[str, str]) -> aiohttp.FormData:
        data = aiohttp.FormData()
        for name, value in form.items():
            data.add_field(name, value)
        return data

    async def send_file(
        self,
        resource_type: ResourceType,
        form: Dict[str, str],
        filename: str,
        content: bytes
    ) -> Dict[str, Any]:
        """
        Upload a whole file in a single multipart request.

        Args:
            resource_type: Endpoint resource type
            form: Metadata form fields
            filename: Filename of the file part
            content: File content

        Returns:
            Decoded JSON response
        """
        data = self._build_form(form)
        data.add_field(
            'file', content,
            filename=filename,
            content_type='application/octet-stream'
        )
        return await self._post(resource_type, data, {}, f"file {filename}")

    async def send_url(
        self,
        resource_type: ResourceType,
        form: Dict[str, str],
        url: str
    ) -> Dict[str, Any]:
        """
        Ask the endpoint to fetch an externally hosted file.

        Args:
            resource_type: Endpoint resource type
            form: Metadata form fields
            url: External URL sent as the ``file`` field

        Returns:
            Decoded JSON response
        """
        data = self._build_form(form)
        data.add_field('file', url)
        return await self._post(resource_type, data, {}, f"url {url}")

    async def send_chunk(
        self,
        resource_type: ResourceType,
        form: Dict[str, str],
        part: ChunkPart,
        upload_id: str,
        total_size: int
    ) -> Dict[str, Any]:
        """
        Upload one chunk of a chunked upload.

        Only this chunk is held in memory while the request is built.

        Args:
            resource_type: Endpoint resource type
            form: Metadata form fields (repeated on every chunk)
            part: Chunk to send
            upload_id: Identifier shared by all chunks of the upload
            total_size: Total size of the source in bytes

        Returns:
            Decoded JSON response
        """
        content = await part.read()
        data = self._build_form(form)
        data.add_field(
            'file', content,
            filename=part.filename,
            content_type='application/octet-stream'
        )
        headers = {
            UPLOAD_ID_HEADER: upload_id,
            CONTENT_RANGE_HEADER: f"bytes {part.range.content_range}/{total_size}",
        }
        return await self._post(
            resource_type, data, headers,
            f"chunk {part.range.content_range}/{total_size} of {part.filename}"
        )

    async def _post(
        self,
        resource_type: ResourceType,
        data: aiohttp.FormData,
        headers: Dict[str, str],
        label: str
    ) -> Dict[str, Any]:
        url = self._config.upload_url(resource_type)
        session = await self._get_session()

        started = time.time()
        self._logger.debug(f"Posting {label} to {url}")
        try:
            async with session.post(url, data=data, headers=headers) as response:
                if response.status >= 400:
                    body = await response.text()
                    self._logger.error(f"Upload of {label} failed: HTTP {response.status}")
                    raise UploadRequestError(
                        f"Upload of {label} failed with HTTP {response.status}: {body}",
                        status=response.status,
                        body=body
                    )
                result = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            self._logger.error(f"Upload of {label} failed after {time.time() - started:.2f}s: {e}")
            raise

        self._logger.debug(f"Posted {label} in {time.time() - started:.2f}s")
        return result
