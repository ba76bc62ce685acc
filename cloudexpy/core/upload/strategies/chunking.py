"""
Chunking strategies for file uploads.

Implements Strategy Pattern for different chunking algorithms.
Open for extension (new strategies), closed for modification.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ChunkInfo


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """Calculate chunk boundaries."""
        pass


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking as used by Cloudinary chunked uploads.

    Every chunk is ``chunk_size`` bytes except the last, which holds the
    remainder. An empty file still yields one (empty) chunk so it goes
    through the same request path as any other file.
    """

    DEFAULT_CHUNK_SIZE = 6_000_000

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """
        Calculate fixed-size chunk boundaries.

        Args:
            file_size: Total file size in bytes

        Returns:
            ChunkInfo list in ascending order, contiguous, covering
            ``[0, file_size)``
        """
        if file_size == 0:
            return [ChunkInfo(index=0, start=0, end=0)]

        chunks = []
        position = 0

        while position < file_size:
            end = min(position + self.chunk_size, file_size)
            chunks.append(ChunkInfo(index=len(chunks), start=position, end=end))
            position = end

        return chunks

    def content_range(self, chunk: ChunkInfo, total_size: int) -> str:
        """Content-Range header value for ``chunk``."""
        return content_range(chunk.index, total_size, self.chunk_size)


def content_range(index: int, total_size: int, chunk_size: int) -> str:
    """
    Build ``bytes {start}-{end}/{total}`` for the chunk at ``index``.

    The chunk at index ``total_size // chunk_size`` is the short trailing
    chunk and ends at ``total_size - 1``; every other chunk ends at
    ``start + chunk_size - 1``. An empty file's single chunk is reported
    as ``bytes 0-0/0``.
    """
    start = index * chunk_size

    if total_size // chunk_size == index:
        end = total_size - 1
    else:
        end = start + chunk_size - 1

    return f"bytes {start}-{max(end, start)}/{total_size}"
