"""
cloudexpy - Async Python client for Cloudinary uploads.

Usage:
    >>> from cloudexpy import CloudexClient, CloudinaryConfig
    >>>
    >>> config = CloudinaryConfig("my_cloud", "api_key", "secret")
    >>> async with CloudexClient(config) as cloudex:
    ...     video = await cloudex.upload_large("movie.mp4", opts={'resource_type': 'video'})
    ...     print(video.duration)
"""
import logging
from .client import CloudexClient

# Configuration
from .core.api import (
    CloudinaryConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AiohttpTransport,
    TransportResponse,
    sign,
)

# Results
from .core.upload import (
    LocalFile,
    RemoteUrl,
    UploadedImage,
    UploadedVideo,
    DeletedImage,
    UploadProgress,
)
from .core.events import EventEmitter

# Errors
from .core.exceptions import (
    CloudexError,
    ConfigurationError,
    InvalidInputError,
    UploadFileNotFoundError,
    FileReadError,
    TransportError,
    DecodeError,
    ApiError,
    ChunkFailureError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for cloudexpy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'cloudexpy',
        'cloudexpy.client',
        'cloudexpy.api.transport',
        'cloudexpy.upload',
        'cloudexpy.upload.coordinator',
        'cloudexpy.upload.chunk',
        'cloudexpy.upload.file',
        'cloudexpy.delete',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'CloudexClient',
    'CloudinaryConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AiohttpTransport',
    'TransportResponse',
    'sign',
    'LocalFile',
    'RemoteUrl',
    'UploadedImage',
    'UploadedVideo',
    'DeletedImage',
    'UploadProgress',
    'EventEmitter',
    'CloudexError',
    'ConfigurationError',
    'InvalidInputError',
    'UploadFileNotFoundError',
    'FileReadError',
    'TransportError',
    'DecodeError',
    'ApiError',
    'ChunkFailureError',
    'setup_logging',
]
