"""Upload models."""
from .upload_models import (
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

__all__ = [
    'LocalFile',
    'RemoteUrl',
    'UploadTarget',
    'parse_target',
    'UploadedImage',
    'UploadedVideo',
    'DeletedImage',
    'ChunkInfo',
    'ChunkSession',
    'UploadProgress'
]
