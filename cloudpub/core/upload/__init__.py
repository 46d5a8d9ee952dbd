"""
Upload module.

Sources, chunk planning, lazy chunk parts, form encoding and the transport
that posts them to the upload endpoint.
"""
from .facade import UploadFacade
from .coordinator import UploadCoordinator
from .models import ResourceType, ChunkRange, ChunkPart
from .source import (
    UploadSource,
    BufferOrigin,
    BytesOrigin,
    PathOrigin,
    UrlOrigin,
)
from .strategies import FixedSizeChunkingStrategy, plan_chunks
from .services import (
    ChunkMaterializer,
    materialize,
    create_chunks,
    build_form_data,
    UploadTransport,
)
from .protocols import ChunkingStrategy, SourceOrigin, UploadTransportProtocol

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadCoordinator',
    'UploadSource',

    # Origins
    'BufferOrigin',
    'BytesOrigin',
    'PathOrigin',
    'UrlOrigin',

    # Models
    'ResourceType',
    'ChunkRange',
    'ChunkPart',

    # Chunking and encoding
    'FixedSizeChunkingStrategy',
    'plan_chunks',
    'ChunkMaterializer',
    'materialize',
    'create_chunks',
    'build_form_data',
    'UploadTransport',

    # Protocols
    'ChunkingStrategy',
    'SourceOrigin',
    'UploadTransportProtocol',
]
