"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, Dict, Any, List, Optional, Mapping
from pathlib import Path

from .models import ChunkInfo


class TransportProtocol(Protocol):
    """
    Protocol for the HTTP transport.

    Implementations raise TransportError on network failure and return
    any HTTP status otherwise.
    """

    async def post(
        self,
        url: str,
        data: Any,
        headers: Optional[Dict[str, str]] = None,
        request_options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Send a POST request.

        Returns:
            Object with ``status`` (int), ``ok`` (status 200) and ``body`` (bytes)
        """
        ...

    async def delete(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        request_options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Send a DELETE request."""
        ...


class ChunkingStrategy(Protocol):
    """
    Protocol for file chunking strategies.
    """

    chunk_size: int

    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """
        Calculate chunk boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            Ordered list of chunks
        """
        ...

    def content_range(self, chunk: ChunkInfo, total_size: int) -> str:
        """Content-Range header value for ``chunk``."""
        ...


class FileReaderProtocol(Protocol):
    """Protocol for file reading operations."""

    async def open_file(self, file_path: Path) -> None:
        """Keep ``file_path`` open for the following read_chunk calls."""
        ...

    async def close_file(self) -> None:
        """Release the handle opened by open_file."""
        ...

    async def read_chunk(
        self,
        file_path: Path,
        start: int,
        end: int
    ) -> bytes:
        """
        Read a chunk from a file.

        Args:
            file_path: Path to the file
            start: Start position in bytes
            end: End position in bytes (exclusive)
        """
        ...

    async def read_file(self, file_path: Path) -> bytes:
        """Read an entire file."""
        ...
