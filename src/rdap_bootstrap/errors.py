"""Error types raised by the bootstrap client.

Every failure that crosses a public boundary is a ``BootstrapError`` carrying
an ``ErrorCode`` and a ``recoverable`` flag. ``recoverable`` tells the caller
whether retrying the same call later could succeed (network trouble, cache
I/O) or not (malformed data, bad query syntax).
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    MALFORMED_REGISTRY = "MALFORMED_REGISTRY"
    EMPTY_REGISTRY_FILE = "EMPTY_REGISTRY_FILE"
    INVALID_QUERY = "INVALID_QUERY"
    ADDRESS_FAMILY_MISMATCH = "ADDRESS_FAMILY_MISMATCH"
    REGISTRY_HTTP_ERROR = "REGISTRY_HTTP_ERROR"
    REGISTRY_FETCH_FAILED = "REGISTRY_FETCH_FAILED"
    DOWNLOAD_TIMEOUT = "DOWNLOAD_TIMEOUT"
    CACHE_ENTRY_NOT_FOUND = "CACHE_ENTRY_NOT_FOUND"
    CACHE_IO_ERROR = "CACHE_IO_ERROR"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"


class BootstrapError(Exception):
    """Single exception type for all bootstrap failures."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __repr__(self) -> str:
        return (
            f"BootstrapError(code={self.code.value!r}, message={self.message!r}, "
            f"recoverable={self.recoverable})"
        )
