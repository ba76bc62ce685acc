"""
Chunked upload coordinator.

Uploads a large file as consecutive byte ranges sharing one
X-Unique-Upload-Id. Cloudinary assembles the ranges in arrival order, so
chunks are sent strictly one after another and the first rejected chunk
ends the upload.
"""
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .models import ChunkSession, UploadProgress, UploadedImage, UploadedVideo
from .protocols import ChunkingStrategy, FileReaderProtocol, TransportProtocol
from .services import (
    AsyncFileReader,
    ChunkUploader,
    FileValidator,
    ResponseTranslator,
    GENERIC_ERROR,
)
from .strategies import FixedSizeChunkingStrategy
from ..api import CloudinaryConfig, Signer, strip_transport_options
from ..events import EventEmitter, UPLOAD_LARGE, CHUNK
from ..exceptions import ChunkFailureError, DecodeError, InvalidInputError, TransportError
from ..logging import get_logger
from ..utils import upload_id_for

logger = get_logger('cloudexpy.upload.coordinator')

DEFAULT_CHUNK_SIZE = 6_000_000


class ChunkState(Enum):
    """States of a chunked upload."""
    SENDING = 'sending'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass
class ChunkOutcome:
    """
    Where the chunk loop stopped.

    Attributes:
        state: SUCCEEDED after the last chunk, FAILED on the first rejection
        chunk_index: Index of the last chunk sent
        response: Response of that chunk (None after a transport error)
        cause: Transport error that stopped the loop, if any
    """
    state: ChunkState
    chunk_index: int
    response: Any = None
    cause: Optional[BaseException] = None


class ChunkedUploadCoordinator:
    """
    Coordinates chunked uploads.

    Uses dependency injection for all components, making it testable
    with a fake transport and extensible with another chunking strategy.
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        transport: TransportProtocol,
        events: Optional[EventEmitter] = None,
        file_reader_factory: Callable[[], FileReaderProtocol] = AsyncFileReader,
        chunking_factory: Callable[[int], ChunkingStrategy] = FixedSizeChunkingStrategy,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            config: Client configuration
            transport: HTTP transport
            events: Observer hooks (a private emitter when omitted)
            file_reader_factory: Builds a file reader for each upload
            chunking_factory: Builds a chunking strategy for a chunk size
            progress_callback: Called after every accepted chunk
        """
        self._config = config
        self._events = events or EventEmitter()
        self._file_reader_factory = file_reader_factory
        self._chunking_factory = chunking_factory
        self._validator = FileValidator()
        self._uploader = ChunkUploader(config, transport, Signer(config))
        self._progress_callback = progress_callback

    async def upload_large(
        self,
        file_path: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        opts: Optional[Mapping[str, Any]] = None
    ) -> Union[UploadedImage, UploadedVideo]:
        """
        Upload a file in chunks.

        Args:
            file_path: Local file to upload
            chunk_size: Bytes per chunk
            opts: Upload options, signed into every chunk

        Returns:
            Record built from the last chunk's response, which carries the
            metadata of the assembled resource

        Raises:
            InvalidInputError: If chunk_size is not a positive int or the
                path is not a str/Path
            UploadFileNotFoundError: If the file does not exist
            ChunkFailureError: If a chunk was rejected or could not be sent
            DecodeError: If the final response is not JSON
            ApiError: If the final response carries ``error.message``
        """
        if not isinstance(file_path, (str, Path)):
            raise InvalidInputError(
                f"upload_large only accepts a str or Path, received: {file_path!r}"
            )
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
            raise InvalidInputError(f"chunk_size must be a positive int, received: {chunk_size!r}")

        source = str(file_path)
        path, total_size = self._validator.validate(file_path)

        session = ChunkSession(
            upload_id=upload_id_for(file_path),
            path=path,
            total_size=total_size,
            chunk_size=chunk_size
        )
        strategy = self._chunking_factory(chunk_size)
        request_options, api_opts = strip_transport_options(opts or {})

        total_mb = total_size / (1024 * 1024)
        logger.info(f"Starting chunked upload: {path.name} ({total_mb:.2f} MB)")

        with self._events.span(UPLOAD_LARGE, source=source, total_size=total_size) as meta:
            outcome = await self._send_chunks(
                session, strategy, self._file_reader_factory(), api_opts, request_options
            )
            meta['chunks'] = outcome.chunk_index + 1

            if outcome.state is ChunkState.FAILED:
                raise self._failure(outcome, source)

            logger.info(f"All {outcome.chunk_index + 1} chunks accepted for {path.name}")
            return ResponseTranslator.handle(outcome.response, source)

    async def _send_chunks(
        self,
        session: ChunkSession,
        strategy: ChunkingStrategy,
        reader: FileReaderProtocol,
        opts: Dict[Any, Any],
        request_options: Dict[str, Any]
    ) -> ChunkOutcome:
        """
        Send chunks in ascending order until one fails.

        Each accepted chunk (status 200) becomes the running result; any
        other status or a transport error halts the loop. ``reader`` belongs
        to this upload alone and is closed on exit.
        """
        chunks = strategy.calculate_chunks(session.total_size)
        progress = UploadProgress(total_chunks=len(chunks), total_bytes=session.total_size)
        logger.info(f"File split into {len(chunks)} chunks of up to {session.chunk_size} bytes")

        state = ChunkState.SENDING
        outcome = ChunkOutcome(state, chunk_index=0)

        await reader.open_file(session.path)
        try:
            for chunk in chunks:
                session.chunk_index = chunk.index
                data = await reader.read_chunk(session.path, chunk.start, chunk.end)
                content_range = strategy.content_range(chunk, session.total_size)

                with self._events.span(CHUNK, index=chunk.index, content_range=content_range) as meta:
                    chunk_start = time.time()
                    try:
                        response = await self._uploader.upload_chunk(
                            session, data, content_range, opts, request_options
                        )
                    except TransportError as e:
                        logger.error(f"Chunk {chunk.index} failed after {time.time() - chunk_start:.2f}s: {e}")
                        meta['outcome'] = 'failure'
                        state = ChunkState.FAILED
                        outcome = ChunkOutcome(state, chunk.index, cause=e)
                        break

                    meta['status'] = response.status
                    if not response.ok:
                        logger.error(f"Chunk {chunk.index} rejected with HTTP {response.status}")
                        meta['outcome'] = 'failure'
                        state = ChunkState.FAILED
                        outcome = ChunkOutcome(state, chunk.index, response=response)
                        break

                outcome = ChunkOutcome(state, chunk.index, response=response)

                progress.uploaded_chunks = chunk.index + 1
                progress.uploaded_bytes = chunk.end
                if self._progress_callback:
                    self._progress_callback(progress)
        finally:
            await reader.close_file()

        if state is ChunkState.SENDING:
            outcome.state = ChunkState.SUCCEEDED
        return outcome

    @staticmethod
    def _failure(outcome: ChunkOutcome, source: str) -> ChunkFailureError:
        """Build the error reported for a failed chunk."""
        if outcome.response is None:
            return ChunkFailureError(
                GENERIC_ERROR,
                chunk_index=outcome.chunk_index,
                cause=outcome.cause,
                source=source
            )

        status = outcome.response.status
        try:
            payload = ResponseTranslator.decode(outcome.response.body, source)
        except DecodeError as e:
            return ChunkFailureError(
                GENERIC_ERROR,
                chunk_index=outcome.chunk_index,
                status=status,
                cause=e,
                source=source
            )

        message = ResponseTranslator.error_message(payload) or GENERIC_ERROR
        return ChunkFailureError(
            message,
            chunk_index=outcome.chunk_index,
            status=status,
            response=payload,
            source=source
        )
