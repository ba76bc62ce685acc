"""
Custom exceptions for Cloudinary upload and delete operations.

Every error raised by cloudexpy derives from CloudexError, so callers can
catch the whole family at once. Batch operations return these instances
in place of results for the items that failed.
"""
from typing import Optional, Any, Dict


class CloudexError(Exception):
    """Base exception for all cloudexpy errors."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            source: Path or URL the failing operation was working on
        """
        self.message = message
        self.source = source
        super().__init__(message)


class ConfigurationError(CloudexError):
    """Raised when cloud name or credentials are missing."""
    pass


class InvalidInputError(CloudexError, TypeError):
    """Raised when a caller passes a value this API does not accept."""
    pass


class UploadFileNotFoundError(CloudexError, FileNotFoundError):
    """Raised when a local upload path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File {path} does not exist.", source=path)


class FileReadError(CloudexError):
    """Raised when a local upload file cannot be read (permissions, I/O errors)."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(f"Cannot read file {path}: {cause}", source=path)


class TransportError(CloudexError):
    """Raised for network, connection and timeout failures."""
    pass


class DecodeError(CloudexError):
    """Raised when a response body is not valid JSON."""

    def __init__(
        self,
        message: str,
        body: bytes = b'',
        source: Optional[str] = None
    ) -> None:
        self.body = body
        super().__init__(message, source)


class ApiError(CloudexError):
    """Raised when Cloudinary answers with an ``error.message`` payload."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message reported by the API
            status: HTTP status code of the response (if known)
            response: Decoded response payload (if any)
            source: Path or URL being uploaded
        """
        self.status = status
        self.response = response
        super().__init__(message, source)


class ChunkFailureError(ApiError):
    """Raised when one chunk of a chunked upload is rejected."""

    def __init__(
        self,
        message: str,
        chunk_index: int,
        status: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
        source: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message of the failing chunk
            chunk_index: Zero-based index of the chunk that failed
            status: HTTP status of the failing chunk response
            response: Decoded body of the failing chunk (if decodable)
            cause: Underlying transport or decode error (if any)
            source: Path being uploaded
        """
        self.chunk_index = chunk_index
        self.cause = cause
        super().__init__(message, status=status, response=response, source=source)

    def __str__(self) -> str:
        return f"Chunk {self.chunk_index} failed: {self.message}"
