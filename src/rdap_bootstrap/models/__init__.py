from __future__ import annotations

from rdap_bootstrap.models.cache import FileState
from rdap_bootstrap.models.registry import (
    Answer,
    ASNRange,
    NetEntry,
    Question,
    RegistryFile,
    RegistryType,
)

__all__ = [
    # registry
    "RegistryType",
    "RegistryFile",
    "ASNRange",
    "NetEntry",
    "Answer",
    "Question",
    # cache
    "FileState",
]
