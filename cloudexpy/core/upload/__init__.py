"""
Upload module for Cloudinary uploads.

UploadFacade sends a file or URL in one request; ChunkedUploadCoordinator
sends large files as sequential byte ranges.
"""
from .facade import UploadFacade
from .coordinator import ChunkedUploadCoordinator, ChunkState, ChunkOutcome
from .models import (
    LocalFile,
    RemoteUrl,
    UploadTarget,
    parse_target,
    UploadedImage,
    UploadedVideo,
    DeletedImage,
    ChunkInfo,
    ChunkSession,
    UploadProgress
)
from .protocols import ChunkingStrategy, FileReaderProtocol, TransportProtocol

__all__ = [
    # Main classes
    'UploadFacade',
    'ChunkedUploadCoordinator',
    'ChunkState',
    'ChunkOutcome',

    # Models
    'LocalFile',
    'RemoteUrl',
    'UploadTarget',
    'parse_target',
    'UploadedImage',
    'UploadedVideo',
    'DeletedImage',
    'ChunkInfo',
    'ChunkSession',
    'UploadProgress',

    # Protocols
    'ChunkingStrategy',
    'FileReaderProtocol',
    'TransportProtocol',
]
