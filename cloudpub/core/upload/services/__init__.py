"""Upload services module."""
from .file_service import AsyncFileReader
from .form_service import build_form_data, encode_tags, encode_context
from .chunk_service import ChunkMaterializer, materialize, create_chunks
from .transport import UploadTransport

__all__ = [
    'AsyncFileReader',
    'build_form_data',
    'encode_tags',
    'encode_context',
    'ChunkMaterializer',
    'materialize',
    'create_chunks',
    'UploadTransport',
]
