"""
Chunk upload service.

Sends one byte range of a chunked upload to Cloudinary.
"""
from typing import Any, Dict, Mapping, Optional
import time

import aiohttp

from ..models import ChunkSession
from ..protocols import TransportProtocol
from ...api import CloudinaryConfig, Signer
from ...api.params import option
from ...logging import get_logger

CHUNK_FILENAME = 'blob'
CHUNK_CONTENT_TYPE = 'application/octet-stream'


class ChunkUploader:
    """
    Uploads chunks of one upload session.

    Every chunk is signed on its own and carries the session's
    X-Unique-Upload-Id so the server assembles them into one resource.
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        transport: TransportProtocol,
        signer: Optional[Signer] = None
    ):
        """
        Initialize chunk uploader.

        Args:
            config: Client configuration
            transport: HTTP transport
            signer: Signer (built from config when omitted)
        """
        self._config = config
        self._transport = transport
        self._signer = signer or Signer(config)
        self._logger = get_logger('cloudexpy.upload.chunk')

    def build_form(self, data: bytes, fields: Mapping[str, str]) -> aiohttp.FormData:
        """Multipart form with the chunk as ``file`` followed by the signed fields."""
        form = aiohttp.FormData()
        form.add_field(
            'file',
            data,
            filename=CHUNK_FILENAME,
            content_type=CHUNK_CONTENT_TYPE
        )
        for name, value in fields.items():
            form.add_field(name, value)
        return form

    @staticmethod
    def build_headers(session: ChunkSession, content_range: str, content_type: str) -> Dict[str, str]:
        """Headers tying a chunk to its session and byte range."""
        return {
            'X-Unique-Upload-Id': session.upload_id,
            'Content-Range': content_range,
            'Content-Type': content_type,
        }

    async def upload_chunk(
        self,
        session: ChunkSession,
        data: bytes,
        content_range: str,
        opts: Mapping[str, Any],
        request_options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Upload a single chunk.

        Args:
            session: Upload session the chunk belongs to
            data: Chunk bytes
            content_range: Content-Range header value
            opts: Upload options (signed with every chunk)
            request_options: Transport options

        Returns:
            Transport response, whatever its status

        Raises:
            TransportError: If the request could not be completed
        """
        resource_type = option(opts, 'resource_type', 'image')
        url = self._config.upload_url(resource_type)

        payload = self.build_form(data, self._signer.signed_fields(opts))()
        headers = self.build_headers(session, content_range, payload.content_type)

        chunk_size_kb = len(data) / 1024
        self._logger.debug(
            f"Uploading chunk {session.chunk_index} ({content_range}, {chunk_size_kb:.1f} KB)"
        )

        upload_start = time.time()
        response = await self._transport.post(url, payload, headers, request_options)
        upload_time = time.time() - upload_start

        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(
            f"Chunk {session.chunk_index} answered {response.status} "
            f"in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)"
        )
        return response
