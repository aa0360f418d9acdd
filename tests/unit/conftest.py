"""Unit-specific fixtures (no I/O beyond a temporary cache directory)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rdap_bootstrap.cache import DiskCache, MemoryCache

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    """A cache directory that doesn't exist yet (created on first save)."""
    return tmp_path / ".rdap-bootstrap"


@pytest.fixture()
def disk_cache(cache_dir: Path) -> DiskCache:
    return DiskCache(cache_dir)
