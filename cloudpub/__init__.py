"""
cloudpub - Async Python uploads to unsigned media endpoints.

Usage:
    >>> from cloudpub import UploadFacade, UploadSource
    >>>
    >>> async with UploadFacade.create("demo", "unsigned_preset") as uploader:
    ...     source = UploadSource.from_file("movie.mp4", tags=["trailer"])
    ...     result = await uploader.upload_file_in_chunks(source)
"""
import logging

from .core.config import UploadConfig, SSLConfig, TimeoutConfig
from .core.exceptions import (
    CloudPubError,
    InvalidSourceError,
    InvalidOperationError,
    InvalidRangeError,
    UploadRequestError,
)
from .core.upload import (
    UploadFacade,
    UploadCoordinator,
    UploadSource,
    ResourceType,
    ChunkRange,
    ChunkPart,
    FixedSizeChunkingStrategy,
    plan_chunks,
    materialize,
    create_chunks,
    build_form_data,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for cloudpub modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'cloudpub',
        'cloudpub.upload',
        'cloudpub.upload.chunk',
        'cloudpub.upload.file',
        'cloudpub.upload.transport',
        'cloudpub.upload.coordinator',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'UploadFacade',
    'UploadCoordinator',
    'UploadSource',
    'ResourceType',
    'ChunkRange',
    'ChunkPart',
    'FixedSizeChunkingStrategy',
    'plan_chunks',
    'materialize',
    'create_chunks',
    'build_form_data',
    'UploadConfig',
    'SSLConfig',
    'TimeoutConfig',
    'CloudPubError',
    'InvalidSourceError',
    'InvalidOperationError',
    'InvalidRangeError',
    'UploadRequestError',
    'setup_logging',
]
