"""Authenticated GitHub REST reader using httpx + Cachetta."""

import hashlib
import logging
import time
from datetime import timedelta
from pathlib import Path

import httpx
from cachetta import Cachetta

from .errors import AuthError, RemoteError, TransportError
from .models import ApiResponse
from .settings import DEFAULT_CACHE_DIR, get_settings

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

USER_AGENT = "github-history-aggregator"
REQUESTS_PER_SECOND = 1.3
DEFAULT_DURATION = timedelta(days=1)


def _cache_key(url: str) -> str:
    return hashlib.sha256(url.encode()).hexdigest()[:16]


class HistoryClient:
    """Thin client that fetches one URL at a time and returns it untouched.

    The authorization value is fixed at construction and sent with every
    request alongside a constant User-Agent. Calls are spaced out to at most
    ``requests_per_second``. No retries: every failure surfaces as a
    ``HistoryError`` subclass.
    """

    def __init__(
        self,
        authorization: str,
        cache_dir: Path | None = None,
        use_cache: bool = False,
        skip_cache: bool = False,
        requests_per_second: float = REQUESTS_PER_SECOND,
        duration: timedelta = DEFAULT_DURATION,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(
            headers={
                "Authorization": authorization,
                "User-Agent": USER_AGENT,
                "Accept": "application/vnd.github+json",
            },
            timeout=30.0,
            # renamed or transferred repositories answer 301
            follow_redirects=True,
            transport=transport,
        )
        self._last_request_time = 0.0
        self._min_interval = 1.0 / requests_per_second if requests_per_second > 0 else 0

        # Pure fetch function -- no throttle, no cache logic.
        # Cachetta handles caching; exceptions propagate (not cached).
        def _do_fetch(url):
            try:
                resp = self._client.request("GET", url)
            except httpx.TransportError as e:
                raise TransportError(f"Request failed: {e}", url=url) from e

            if 200 <= resp.status_code < 300:
                return {
                    "status": resp.status_code,
                    "body": resp.text,
                    "link": resp.headers.get("link"),
                }

            if resp.status_code == 401:
                raise AuthError("GitHub rejected the credentials (401)", url=url)
            if resp.status_code == 403:
                if "rate limit" in resp.text.lower():
                    raise RemoteError("GitHub rate limit exceeded (403)", url=url, status=403)
                raise AuthError("GitHub refused access (403)", url=url)
            raise RemoteError(f"GitHub API error {resp.status_code}", url=url, status=resp.status_code)

        if use_cache:
            root = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR

            def _path(url):
                return root / f"{_cache_key(url)}.json"

            cache = Cachetta(path=_path, duration=duration)
            cache = cache.copy(read=False) if skip_cache else cache
            self._fetch = cache(_do_fetch)
        else:
            self._fetch = _do_fetch

    def _throttle(self):
        now = time.time()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.time()

    def get(self, url: str) -> ApiResponse:
        """Fetch ``url`` and return its body and link header verbatim.

        Raises:
            TransportError: the request never got a response.
            AuthError: 401, or 403 that is not a rate limit.
            RemoteError: any other non-2xx status.
        """
        self._throttle()
        data = self._fetch(url)
        return ApiResponse(
            url=url,
            status=data["status"],
            body=data["body"],
            link=data.get("link"),
        )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def make_client(authorization: str, use_cache: bool = False, skip_cache: bool = False) -> HistoryClient:
    """Build a client from application settings."""
    settings = get_settings()
    return HistoryClient(
        authorization,
        cache_dir=settings.cache_dir,
        use_cache=use_cache,
        skip_cache=skip_cache,
        requests_per_second=settings.requests_per_second,
        duration=timedelta(days=settings.cache_days),
    )
