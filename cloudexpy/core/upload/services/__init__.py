"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .chunk_service import ChunkUploader
from .response_service import ResponseTranslator, GENERIC_ERROR

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'ChunkUploader',
    'ResponseTranslator',
    'GENERIC_ERROR',
]
