"""Upload models."""
from .upload_models import (
    ResourceType,
    ChunkRange,
    ChunkPart,
    DEFAULT_PIECE_SIZE
)

__all__ = [
    'ResourceType',
    'ChunkRange',
    'ChunkPart',
    'DEFAULT_PIECE_SIZE'
]
