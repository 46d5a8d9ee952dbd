"""Upload strategies module."""
from .chunking import BaseChunkingStrategy, FixedSizeChunkingStrategy, plan_chunks

__all__ = [
    'BaseChunkingStrategy',
    'FixedSizeChunkingStrategy',
    'plan_chunks',
]
