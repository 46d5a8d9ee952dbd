"""
Custom exceptions for cloudpub upload operations.

This module defines exception classes raised by sources, the chunking
machinery and the upload transport.
"""
from typing import Optional, Any


class CloudPubError(Exception):
    """Base exception for all cloudpub errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class InvalidSourceError(CloudPubError, ValueError):
    """Raised when an upload source is constructed without a valid origin."""
    pass


class InvalidOperationError(CloudPubError):
    """
    Raised when a byte-level operation is attempted on an external URL source.

    External sources have no local bytes to read, slice or encode as a
    multipart body.
    """
    pass


class InvalidRangeError(CloudPubError, ValueError):
    """Raised when a byte range is malformed or exceeds the source size."""

    def __init__(
        self,
        message: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            start: Requested range start
            end: Requested range end (exclusive)
            error_code: Numeric error code (if available)
        """
        self.start = start
        self.end = end
        super().__init__(message, error_code)


class UploadRequestError(CloudPubError):
    """Raised when the upload endpoint answers with an HTTP error status."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Any = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code
            body: Raw response body (if available)
        """
        self.status = status
        self.body = body
        super().__init__(message, status)
