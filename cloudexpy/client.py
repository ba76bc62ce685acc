"""
CloudexClient - High-level async client for Cloudinary uploads.

Example:
    >>> config = CloudinaryConfig.from_env()
    >>> async with CloudexClient(config) as cloudex:
    ...     image = await cloudex.upload("photo.jpg", {'tags': ['holiday']})
    ...     print(image.secure_url)
"""
import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Union

from .core.api import AiohttpTransport, CloudinaryConfig
from .core.delete import DeletionService
from .core.events import EventEmitter
from .core.exceptions import CloudexError
from .core.logging import get_logger
from .core.upload import (
    ChunkedUploadCoordinator,
    DeletedImage,
    LocalFile,
    RemoteUrl,
    TransportProtocol,
    UploadFacade,
    UploadedImage,
    UploadedVideo,
    UploadProgress,
    parse_target,
)
from .core.upload.coordinator import DEFAULT_CHUNK_SIZE

Uploaded = Union[UploadedImage, UploadedVideo]
Target = Union[str, Path, LocalFile, RemoteUrl]


class CloudexClient:
    """
    High-level async Cloudinary client.

    Single items return their record or raise a CloudexError. Lists
    return a list aligned with the input, holding the record or the
    CloudexError of each item; one failing item never stops the others.

    Example:
        >>> async with CloudexClient(config) as cloudex:
        ...     results = await cloudex.upload(["a.jpg", "missing.png", "https://x/y.jpg"])
        ...     for item in results:
        ...         print(item)
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        transport: Optional[TransportProtocol] = None,
        *,
        events: Optional[EventEmitter] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize the client.

        Args:
            config: Cloud name, credentials and transport settings
            transport: HTTP transport (aiohttp when omitted)
            events: Observer hooks shared by every operation
            progress_callback: Called after each accepted chunk of upload_large
        """
        config.validate()
        self._config = config
        self._transport = transport or AiohttpTransport(config)
        self._events = events or EventEmitter()
        self._logger = get_logger('cloudexpy.client')

        self._uploader = UploadFacade(config, self._transport, self._events)
        self._chunked = ChunkedUploadCoordinator(
            config,
            self._transport,
            self._events,
            progress_callback=progress_callback
        )
        self._deleter = DeletionService(config, self._transport)

    @property
    def config(self) -> CloudinaryConfig:
        return self._config

    async def __aenter__(self) -> 'CloudexClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Release the transport's HTTP session."""
        close = getattr(self._transport, 'close', None)
        if close is not None:
            await close()

    def on(self, event: str, callback: Callable) -> 'CloudexClient':
        """Register an observer hook (e.g. 'chunk.stop')."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'CloudexClient':
        """Remove an observer hook."""
        self._events.off(event, callback)
        return self

    # =========================================================================
    # Upload
    # =========================================================================

    async def upload(
        self,
        target: Union[Target, Sequence[Target]],
        opts: Optional[Mapping[str, Any]] = None
    ) -> Union[Uploaded, List[Union[Uploaded, CloudexError]]]:
        """
        Upload files or URLs.

        Args:
            target: A path, URL, directory, or a list of paths and URLs
            opts: Upload options, e.g. ``{'resource_type': 'video',
                'tags': ['a'], 'request_options': {'timeout': 60}}``

        Returns:
            The record for a single target; a list of records/errors for a
            list or a directory (its regular files, sorted by name)

        Raises:
            CloudexError: For a single target that fails
        """
        opts = dict(opts or {})

        if isinstance(target, (list, tuple)):
            return await self._batch([self._uploader.upload(item, opts) for item in target])

        directory = self._as_directory(target)
        if directory is not None:
            files = sorted(p for p in directory.iterdir() if p.is_file())
            self._logger.info(f"Uploading {len(files)} files from {directory}")
            return await self._batch([self._uploader.upload(p, opts) for p in files])

        return await self._uploader.upload(target, opts)

    async def upload_large(
        self,
        file_path: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        opts: Optional[Mapping[str, Any]] = None
    ) -> Uploaded:
        """
        Upload a local file in ``chunk_size`` byte ranges.

        Raises:
            CloudexError: On any failure; a rejected chunk raises
                ChunkFailureError and stops the upload
        """
        return await self._chunked.upload_large(file_path, chunk_size, opts)

    # =========================================================================
    # Delete
    # =========================================================================

    async def delete(
        self,
        public_id: Union[str, Sequence[str]],
        opts: Optional[Mapping[str, Any]] = None
    ) -> Union[DeletedImage, List[Union[DeletedImage, CloudexError]]]:
        """Delete one public id, or each id of a list."""
        opts = dict(opts or {})

        if isinstance(public_id, (list, tuple)):
            return await self._batch([self._deleter.delete(item, opts) for item in public_id])

        return await self._deleter.delete(public_id, opts)

    async def delete_prefix(
        self,
        prefix: Union[str, Sequence[str]],
        opts: Optional[Mapping[str, Any]] = None
    ) -> Union[str, List[Union[str, CloudexError]]]:
        """Delete every resource under ``prefix`` (or each prefix of a list); returns the prefix."""
        opts = dict(opts or {})

        if isinstance(prefix, (list, tuple)):
            return await self._batch([self._deleter.delete_prefix(item, opts) for item in prefix])

        return await self._deleter.delete_prefix(prefix, opts)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _as_directory(target: Any) -> Optional[Path]:
        if isinstance(target, (LocalFile, str, Path)):
            parsed = parse_target(target)
            if isinstance(parsed, LocalFile) and Path(parsed.path).is_dir():
                return Path(parsed.path)
        return None

    @staticmethod
    async def _settle(operation: Awaitable) -> Any:
        try:
            return await operation
        except CloudexError as e:
            return e

    async def _batch(self, operations: List[Awaitable]) -> List[Any]:
        """Run independent operations concurrently, keeping input order."""
        return list(await asyncio.gather(*(self._settle(op) for op in operations)))
