# ABOUTME: Throttled, retrying JSON GET client used by the Google Books lookups.
# ABOUTME: The httpx transport is injectable so tests never touch the network.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from novelnoted import __version__

logger = logging.getLogger(__name__)

# Statuses worth another attempt: throttling and upstream hiccups.
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


class MetadataFetchError(Exception):
    """A metadata lookup could not produce a JSON document."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Anything that can GET a URL and hand back decoded JSON."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class _Throttle:
    """Keeps successive calls at least `spacing` seconds apart."""

    def __init__(self, spacing: float) -> None:
        self.spacing = spacing
        self._previous: float | None = None

    def wait(self) -> None:
        if self.spacing <= 0:
            return
        if self._previous is not None:
            remaining = self.spacing - (time.monotonic() - self._previous)
            if remaining > 0:
                time.sleep(remaining)
        self._previous = time.monotonic()


class NovelNotedHttpClient:
    """JSON-over-HTTP client for the book metadata providers.

    Each call is throttled once, then attempted up to ``1 + max_retries``
    times. Only TRANSIENT_STATUSES earn a retry, with the pause doubling
    from ``retry_delay``. Every failure surfaces as MetadataFetchError.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            headers={"User-Agent": f"novelnoted/{__version__}"},
            timeout=timeout,
            transport=transport,
        )
        self._throttle = _Throttle(min_request_interval)
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Fetch ``url`` and decode the JSON body.

        Raises:
            MetadataFetchError: the request could not be sent, the server
                answered with a non-transient error or kept failing, or the
                body was not JSON.
        """
        self._throttle.wait()

        total = self.max_retries + 1
        response = self._attempt(url, params)
        for retry in range(1, total):
            if response.status_code not in TRANSIENT_STATUSES:
                break
            pause = self.retry_delay * 2 ** (retry - 1)
            logger.warning(
                "%s answered %d; retry %d/%d in %.1fs",
                url,
                response.status_code,
                retry,
                self.max_retries,
                pause,
            )
            time.sleep(pause)
            response = self._attempt(url, params)

        status = response.status_code
        if response.is_success:
            return self._decode(url, response)
        if status in TRANSIENT_STATUSES:
            raise MetadataFetchError(f"HTTP {status} from {url} after {total} attempts", status)
        raise MetadataFetchError(f"HTTP {status} from {url}", status)

    def close(self) -> None:
        self._http.close()

    def _attempt(self, url: str, params: dict[str, str] | None) -> httpx.Response:
        try:
            return self._http.get(url, params=params)
        except httpx.HTTPError as exc:
            raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

    @staticmethod
    def _decode(url: str, response: httpx.Response) -> dict[str, Any]:
        try:
            return response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"Invalid JSON from {url}", response.status_code) from exc
