"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional, List, Union

from ...exceptions import InvalidInputError
from ...utils import is_remote


@dataclass(frozen=True)
class LocalFile:
    """A file on the local disk."""
    path: str

    @property
    def source(self) -> str:
        return self.path


@dataclass(frozen=True)
class RemoteUrl:
    """A URL Cloudinary fetches itself (http, https or s3)."""
    url: str

    @property
    def source(self) -> str:
        return self.url


UploadTarget = Union[LocalFile, RemoteUrl]


def parse_target(value: Union[str, Path, LocalFile, RemoteUrl]) -> UploadTarget:
    """
    Build an UploadTarget from caller input.

    Strings starting with ``http://``, ``https://`` or ``s3://`` become
    RemoteUrl; every other string and any Path becomes LocalFile.

    Raises:
        InvalidInputError: For any other type
    """
    if isinstance(value, (LocalFile, RemoteUrl)):
        return value
    if isinstance(value, Path):
        return LocalFile(str(value))
    if isinstance(value, str):
        return RemoteUrl(value) if is_remote(value) else LocalFile(value)
    raise InvalidInputError(
        f"upload only accepts a str or Path, received: {value!r}"
    )


@dataclass(frozen=True)
class UploadedImage:
    """
    Metadata of an uploaded image.

    Populated from the Cloudinary response; ``source`` is the path or URL
    that was uploaded. Missing fields are None, ``tags`` defaults to [].
    """
    public_id: Optional[str] = None
    version: Optional[int] = None
    signature: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    resource_type: Optional[str] = None
    created_at: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    bytes: Optional[int] = None
    type: Optional[str] = None
    etag: Optional[str] = None
    url: Optional[str] = None
    secure_url: Optional[str] = None
    original_filename: Optional[str] = None
    moderation: Optional[Any] = None
    context: Optional[Any] = None
    phash: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any], source: Optional[str] = None) -> 'UploadedImage':
        """Create from a decoded upload response."""
        return cls(
            public_id=data.get('public_id'),
            version=data.get('version'),
            signature=data.get('signature'),
            width=data.get('width'),
            height=data.get('height'),
            format=data.get('format'),
            resource_type=data.get('resource_type'),
            created_at=data.get('created_at'),
            tags=_tag_list(data.get('tags')),
            bytes=data.get('bytes'),
            type=data.get('type'),
            etag=data.get('etag'),
            url=data.get('url'),
            secure_url=data.get('secure_url'),
            original_filename=data.get('original_filename'),
            moderation=data.get('moderation'),
            context=data.get('context'),
            phash=data.get('phash'),
            source=source
        )


@dataclass(frozen=True)
class UploadedVideo:
    """
    Metadata of an uploaded video.

    Same fields as UploadedImage plus stream details (``audio``,
    ``video``, ``bit_rate``, ``duration``, ``frame_rate``, ``eager``).
    """
    public_id: Optional[str] = None
    version: Optional[int] = None
    signature: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    resource_type: Optional[str] = None
    created_at: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    bytes: Optional[int] = None
    type: Optional[str] = None
    etag: Optional[str] = None
    url: Optional[str] = None
    secure_url: Optional[str] = None
    original_filename: Optional[str] = None
    moderation: Optional[Any] = None
    context: Optional[Any] = None
    phash: Optional[str] = None
    audio: Optional[Dict[str, Any]] = None
    video: Optional[Dict[str, Any]] = None
    bit_rate: Optional[int] = None
    duration: Optional[float] = None
    frame_rate: Optional[float] = None
    eager: List[Any] = field(default_factory=list)
    source: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any], source: Optional[str] = None) -> 'UploadedVideo':
        """Create from a decoded upload response."""
        return cls(
            public_id=data.get('public_id'),
            version=data.get('version'),
            signature=data.get('signature'),
            width=data.get('width'),
            height=data.get('height'),
            format=data.get('format'),
            resource_type=data.get('resource_type'),
            created_at=data.get('created_at'),
            tags=_tag_list(data.get('tags')),
            bytes=data.get('bytes'),
            type=data.get('type'),
            etag=data.get('etag'),
            url=data.get('url'),
            secure_url=data.get('secure_url'),
            original_filename=data.get('original_filename'),
            moderation=data.get('moderation'),
            context=data.get('context'),
            phash=data.get('phash'),
            audio=data.get('audio'),
            video=data.get('video'),
            bit_rate=data.get('bit_rate'),
            duration=data.get('duration'),
            frame_rate=data.get('frame_rate'),
            eager=list(data.get('eager') or []),
            source=source
        )


def _tag_list(tags: Any) -> List[str]:
    # Chunked uploads may answer with '' instead of [].
    if not tags:
        return []
    if isinstance(tags, str):
        return tags.split(',')
    return list(tags)


@dataclass(frozen=True)
class DeletedImage:
    """
    Result of a delete-by-id call.

    Attributes:
        public_id: The id that was requested for deletion
        response: Raw transport response, untranslated
    """
    public_id: str
    response: Any = None


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a file chunk.

    Attributes:
        index: Chunk index
        start: Start position in bytes
        end: End position in bytes (exclusive)
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start


@dataclass
class ChunkSession:
    """
    State shared by every chunk request of one chunked upload.

    Attributes:
        upload_id: Value of the X-Unique-Upload-Id header
        path: File being uploaded
        total_size: File size in bytes
        chunk_size: Nominal chunk size in bytes
        chunk_index: Index of the chunk currently being sent
    """
    upload_id: str
    path: Path
    total_size: int
    chunk_size: int
    chunk_index: int = 0


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_chunks: Total number of chunks
        uploaded_chunks: Number of uploaded chunks
        total_bytes: Total file size
        uploaded_bytes: Bytes uploaded so far
    """
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_chunks == 0:
            return 0.0
        return (self.uploaded_chunks / self.total_chunks) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_chunks >= self.total_chunks
