"""Upload strategies."""
from .chunking import BaseChunkingStrategy, FixedSizeChunkingStrategy, content_range

__all__ = [
    'BaseChunkingStrategy',
    'FixedSizeChunkingStrategy',
    'content_range',
]
