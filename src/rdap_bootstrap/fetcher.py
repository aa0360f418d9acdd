"""HTTP download of bootstrap registry files.

Transport failures are mapped to ``BootstrapError`` here so the client only
deals with one exception type. Nothing is retried: a failed download is
reported to the caller as-is.
"""

from __future__ import annotations

import httpx
import structlog

from rdap_bootstrap.config import HttpSettings
from rdap_bootstrap.errors import BootstrapError, ErrorCode

log = structlog.get_logger()


def build_http_client(settings: HttpSettings | None = None) -> httpx.AsyncClient:
    """Create the shared httpx client used for registry downloads."""
    settings = settings or HttpSettings()

    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        verify=settings.verify_tls,
        follow_redirects=True,
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
    )


class Fetcher:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> bytes:
        """GET ``url`` and return the response body.

        Raises ``BootstrapError`` on network failure, timeout, or any status
        other than 200.
        """
        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as exc:
            log.warning("registry_fetch_timeout", url=url)
            raise BootstrapError(
                ErrorCode.DOWNLOAD_TIMEOUT, f"Timed out downloading {url}", recoverable=True
            ) from exc
        except httpx.HTTPError as exc:
            log.warning("registry_fetch_error", url=url, error=str(exc))
            raise BootstrapError(
                ErrorCode.REGISTRY_FETCH_FAILED,
                f"Unable to download {url}: {exc}",
                recoverable=True,
            ) from exc

        if response.status_code != 200:
            log.warning("registry_fetch_http_error", url=url, status=response.status_code)
            raise BootstrapError(
                ErrorCode.REGISTRY_HTTP_ERROR,
                f"Server returned non-200 status code: HTTP {response.status_code} "
                f"{response.reason_phrase} ({url})",
                recoverable=response.status_code >= 500,
            )

        return response.content
