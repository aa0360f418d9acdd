"""RDAP bootstrapping: find the RDAP servers responsible for a domain, IP
network, AS number or entity handle (RFC 7484)."""

from __future__ import annotations

__version__ = "0.1.0"

from rdap_bootstrap.cache import DiskCache, MemoryCache, RegistryCache  # noqa: E402
from rdap_bootstrap.client import BootstrapClient, open_client  # noqa: E402
from rdap_bootstrap.errors import BootstrapError, ErrorCode  # noqa: E402
from rdap_bootstrap.models import Answer, FileState, Question, RegistryType  # noqa: E402

__all__ = [
    "__version__",
    "BootstrapClient",
    "open_client",
    "RegistryCache",
    "MemoryCache",
    "DiskCache",
    "BootstrapError",
    "ErrorCode",
    "Answer",
    "Question",
    "RegistryType",
    "FileState",
]
