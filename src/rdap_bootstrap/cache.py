"""Registry file caches.

Two implementations of ``RegistryCache``:

- ``MemoryCache``: private to one client. Files are either absent, good or
  expired.
- ``DiskCache``: a directory of JSON files that several processes may share.
  Each instance remembers the mtime of the version it last loaded or saved,
  so it can tell a file another process has rewritten (``SHOULD_RELOAD``:
  re-read from disk, no download needed) from one it already holds
  (``GOOD``). No locking: writes replace the whole file atomically, so a
  reader sees either the old or the new version, never a partial one.

``state()`` never raises; an unreadable cache entry is reported as absent so
the client falls through to the network. ``load()`` and ``save()`` raise
``BootstrapError`` and leave the fallback decision to the caller.
"""

from __future__ import annotations

import os
import tempfile
import time
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import structlog

from rdap_bootstrap.errors import BootstrapError, ErrorCode
from rdap_bootstrap.models.cache import FileState

if TYPE_CHECKING:
    from rdap_bootstrap.config import CacheSettings

log = structlog.get_logger()

DEFAULT_TIMEOUT = timedelta(hours=24)


class RegistryCache(Protocol):
    timeout: timedelta

    def load(self, filename: str) -> bytes: ...

    def save(self, filename: str, data: bytes) -> None: ...

    def state(self, filename: str) -> FileState: ...

    def set_timeout(self, timeout: timedelta) -> None: ...


def build_cache(settings: CacheSettings) -> RegistryCache:
    """Create the cache backend selected in settings, with its timeout applied."""
    cache: RegistryCache
    if settings.backend == "disk":
        cache = DiskCache(Path(settings.dir).expanduser())
    else:
        cache = MemoryCache()
    cache.set_timeout(timedelta(hours=settings.timeout_hours))
    return cache


class MemoryCache:
    """In-process registry cache."""

    def __init__(self, timeout: timedelta = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self._files: dict[str, bytes] = {}
        self._saved_at: dict[str, float] = {}

    def set_timeout(self, timeout: timedelta) -> None:
        self.timeout = timeout

    def save(self, filename: str, data: bytes) -> None:
        self._files[filename] = bytes(data)
        self._saved_at[filename] = time.time()

    def load(self, filename: str) -> bytes:
        try:
            return self._files[filename]
        except KeyError:
            raise BootstrapError(
                ErrorCode.CACHE_ENTRY_NOT_FOUND, f"{filename} is not cached", recoverable=True
            ) from None

    def state(self, filename: str) -> FileState:
        saved_at = self._saved_at.get(filename)
        if saved_at is None:
            return FileState.ABSENT

        if time.time() >= saved_at + self.timeout.total_seconds():
            return FileState.EXPIRED

        return FileState.GOOD


class DiskCache:
    """Registry cache stored as files under ``directory``."""

    def __init__(self, directory: Path, timeout: timedelta = DEFAULT_TIMEOUT) -> None:
        self.dir = directory
        self.timeout = timeout

        # filename → mtime (ns) of the version this instance last loaded or saved
        self._last_loaded_mtime: dict[str, int] = {}

    def set_timeout(self, timeout: timedelta) -> None:
        self.timeout = timeout

    def init_dir(self) -> None:
        """Create the cache directory if it doesn't exist yet."""
        try:
            self.dir.mkdir(parents=True, exist_ok=True)
        except FileExistsError:
            raise BootstrapError(
                ErrorCode.CACHE_IO_ERROR,
                f"Cache dir {self.dir} is not a directory",
                recoverable=True,
            ) from None
        except OSError as exc:
            raise BootstrapError(
                ErrorCode.CACHE_IO_ERROR,
                f"Unable to create cache dir {self.dir}: {exc}",
                recoverable=True,
            ) from exc

    def save(self, filename: str, data: bytes) -> None:
        path = self._path(filename)
        try:
            self.init_dir()
            fd, tmp_name = tempfile.mkstemp(dir=self.dir, prefix=f".{filename}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.chmod(tmp_name, 0o664)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            mtime = path.stat().st_mtime_ns
        except BootstrapError as exc:
            raise BootstrapError(
                ErrorCode.CACHE_WRITE_FAILED,
                f"Unable to save {filename}: {exc.message}",
                recoverable=True,
            ) from exc
        except OSError as exc:
            log.warning("cache_write_error", filename=filename, dir=str(self.dir), exc_info=True)
            raise BootstrapError(
                ErrorCode.CACHE_WRITE_FAILED,
                f"Unable to save {filename}: {exc}",
                recoverable=True,
            ) from exc

        self._last_loaded_mtime[filename] = mtime

    def load(self, filename: str) -> bytes:
        self.init_dir()
        path = self._path(filename)

        try:
            mtime = path.stat().st_mtime_ns
            data = path.read_bytes()
        except FileNotFoundError:
            raise BootstrapError(
                ErrorCode.CACHE_ENTRY_NOT_FOUND, f"{filename} is not cached", recoverable=True
            ) from None
        except OSError as exc:
            raise BootstrapError(
                ErrorCode.CACHE_IO_ERROR, f"Unable to load {filename}: {exc}", recoverable=True
            ) from exc

        self._last_loaded_mtime[filename] = mtime
        return data

    def state(self, filename: str) -> FileState:
        try:
            mtime = self._path(filename).stat().st_mtime_ns
        except FileNotFoundError:
            return FileState.ABSENT
        except OSError:
            log.warning("cache_stat_error", filename=filename, dir=str(self.dir), exc_info=True)
            return FileState.ABSENT

        age_ns = time.time_ns() - mtime
        if age_ns >= self.timeout.total_seconds() * 1_000_000_000:
            return FileState.EXPIRED

        last_loaded = self._last_loaded_mtime.get(filename)
        if last_loaded is not None and last_loaded >= mtime:
            return FileState.GOOD

        return FileState.SHOULD_RELOAD

    def _path(self, filename: str) -> Path:
        return self.dir / filename
