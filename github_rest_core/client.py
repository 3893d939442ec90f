"""GitHub REST client core using httpx.

One `GitHubRestClient` serves every resource call. It attaches auth, retries
rate limits and transient network failures, follows ``Link`` pagination and
classifies error responses. Results are plain decoded JSON; shaping them is
the caller's job.
"""

import hashlib
import logging
import re
import time
from datetime import timedelta
from pathlib import Path

import httpx
from cachetta import Cachetta

from .errors import GitHubApiError, GitHubError, RateLimited, TransportError, classify_response
from .models import ApiResponse
from .request import RestRequest, build_request
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Transient network failure backoff: BACKOFF_BASE * BACKOFF_FACTOR**attempt
BACKOFF_BASE = 1.0
BACKOFF_FACTOR = 2
# X-RateLimit-Reset has one-second resolution
RESET_SLACK = 1.0
DEFAULT_DURATION = timedelta(days=30)

TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)

_LINK_RE = re.compile(r'<([^>]*)>\s*;\s*rel="?([^";,]+)"?')


def parse_link_header(value: str | None) -> dict[str, str]:
    """Parse a raw ``Link`` header into ``{rel: url}``."""
    links: dict[str, str] = {}
    if not value:
        return links
    for part in value.split(","):
        m = _LINK_RE.search(part)
        if not m:
            continue
        url, rels = m.group(1).strip(), m.group(2)
        for rel in rels.split():
            links.setdefault(rel, url)
    return links


def _cache_path_factory(cache_dir: Path):
    def _cache_path(method, url, headers, content=None, timeout=httpx.USE_CLIENT_DEFAULT):
        auth = hashlib.sha256(headers.get("Authorization", "").encode()).hexdigest()
        raw = f"{method}|{url}|{headers.get('Accept', '')}|{auth}"
        key = hashlib.sha256(raw.encode()).hexdigest()[:16]
        return Path(cache_dir) / f"{key}.json"

    return _cache_path


def _decode_body(resp: httpx.Response):
    if resp.status_code in (204, 205) or not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


class GitHubRestClient:
    """Client for arbitrary GitHub REST endpoints.

    Configuration is read once from `Settings` when the client is built and
    never changed afterwards. ``transport`` is handed to ``httpx.Client`` so a
    fake server (``httpx.MockTransport``) can stand in for GitHub.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        token: str | None = None,
        cache_dir: Path | None = None,
        skip_cache: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.token = token or self.settings.github_token
        self.base_url = self.settings.api_base_url
        self.max_transport_retries = self.settings.github_max_transport_retries
        self.max_rate_limit_wait = self.settings.github_max_rate_limit_wait
        self._client = httpx.Client(
            timeout=self.settings.github_request_timeout,
            follow_redirects=True,
            transport=transport,
        )
        self._skip_cache = skip_cache
        self.rate_limit_hits = 0
        self.retries = 0

        cache_dir = cache_dir or self.settings.github_cache_dir
        if cache_dir:
            Path(cache_dir).mkdir(parents=True, exist_ok=True)
            cache = Cachetta(path=_cache_path_factory(cache_dir), duration=DEFAULT_DURATION)
            self._cached_fetch = cache(self._fetch)
            self._skip_read_fetch = cache.copy(read=False)(self._fetch)
        else:
            self._cached_fetch = None
            self._skip_read_fetch = None

    def __enter__(self) -> "GitHubRestClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self):
        self._client.close()

    # --- single request ---

    def _fetch(self, method, url, headers, content=None, timeout=httpx.USE_CLIENT_DEFAULT) -> dict:
        """One HTTP exchange. No retry; non-2xx raises a classified error."""
        resp = self._client.request(method, url, headers=headers, content=content, timeout=timeout)
        if 200 <= resp.status_code < 300:
            return {
                "status": resp.status_code,
                "body": _decode_body(resp),
                "headers": dict(resp.headers),
                "etag": resp.headers.get("etag"),
                "link": resp.headers.get("link"),
            }
        raise classify_response(resp.status_code, resp.headers, resp.text)

    def _stream_fetch(self, save_path: Path):
        def _fetch(method, url, headers, content=None, timeout=httpx.USE_CLIENT_DEFAULT):
            with self._client.stream(method, url, headers=headers, content=content, timeout=timeout) as resp:
                if not 200 <= resp.status_code < 300:
                    resp.read()
                    raise classify_response(resp.status_code, resp.headers, resp.text)
                save_path.parent.mkdir(parents=True, exist_ok=True)
                with open(save_path, "wb") as f:
                    for chunk in resp.iter_bytes():
                        f.write(chunk)
                return {
                    "status": resp.status_code,
                    "body": None,
                    "headers": dict(resp.headers),
                    "etag": resp.headers.get("etag"),
                    "link": resp.headers.get("link"),
                }

        return _fetch

    def _pick_fetch(self, request: RestRequest, skip_cache: bool):
        # Extended results report current state and are never cached
        if request.method != "GET" or request.extended or self._cached_fetch is None:
            return self._fetch
        if skip_cache or self._skip_cache:
            return self._skip_read_fetch
        return self._cached_fetch

    def _execute(self, request: RestRequest, fetch, deadline: float | None = None) -> dict:
        """Run ``fetch`` for ``request`` under the retry policy.

        A rate limit with a reset hint is waited out and retried once. Transient
        network errors are retried with exponential backoff. Every other error
        propagates straight away.
        """
        url = request.url(self.base_url)
        headers = request.headers(self.token)
        content = request.content()

        attempt = 0
        rate_limit_retried = False
        while True:
            remaining = _remaining(deadline)
            if remaining is not None and remaining <= 0:
                raise TransportError(f"{request.method} {url} timed out before it was sent")
            try:
                return fetch(request.method, url, headers, content, self._request_timeout(remaining))
            except RateLimited as e:
                self.rate_limit_hits += 1
                wait = e.wait_seconds(time.time())
                if rate_limit_retried or wait is None:
                    raise
                if e.retry_after is None:
                    wait += RESET_SLACK
                wait = min(wait, self.max_rate_limit_wait)
                if not _fits(deadline, wait):
                    raise
                logger.warning(
                    "Rate limited on %s %s, waiting %.0fs before retrying", request.method, url, wait
                )
                time.sleep(wait)
                rate_limit_retried = True
            except TRANSIENT_ERRORS as e:
                wait = BACKOFF_BASE * BACKOFF_FACTOR**attempt
                if attempt >= self.max_transport_retries or not _fits(deadline, wait):
                    raise TransportError(
                        f"{request.method} {url} failed after {attempt + 1} attempts: "
                        f"{type(e).__name__}: {e}"
                    ) from e
                attempt += 1
                self.retries += 1
                logger.warning(
                    "%s: %s, retry %d/%d (wait %.1fs)",
                    type(e).__name__, e, attempt, self.max_transport_retries, wait,
                )
                time.sleep(wait)
            except httpx.TransportError as e:
                raise TransportError(f"{request.method} {url} failed: {type(e).__name__}: {e}") from e

    def send(
        self,
        request: RestRequest,
        observe=(404,),
        skip_cache: bool = False,
        timeout: float | None = None,
    ):
        """Execute a prepared request.

        Returns the decoded body, or an `ApiResponse` when the request was
        built with ``extended=True``. In extended mode a response whose status
        is in ``observe`` comes back as an `ApiResponse` instead of raising.
        """
        deadline = _deadline(timeout)
        self._status(request, f"{request.method} {request.path}")
        try:
            data = self._execute(request, self._pick_fetch(request, skip_cache), deadline)
        except GitHubApiError as e:
            if request.extended and e.status in observe:
                return ApiResponse(
                    status=e.status,
                    body=None,
                    headers=e.headers,
                    error_message=e.message,
                )
            raise
        if request.extended:
            return _envelope(data)
        return data["body"]

    def invoke(
        self,
        path: str,
        method: str = "GET",
        params=None,
        body=None,
        accept: str | None = None,
        token: str | None = None,
        additional_headers: dict | None = None,
        extended: bool = False,
        observe=(404,),
        no_status: bool = False,
        skip_cache: bool = False,
        timeout: float | None = None,
    ):
        """Make a single GitHub REST API call.

        Args:
            path: API path, e.g. "repos/owner/repo/issues/1"
            method: HTTP method (default GET)
            params: Query parameters
            body: JSON body; omitted when None
            accept: Accept header override (preview media types)
            token: Token for this call only
            extended: Return an ApiResponse with status and headers
            observe: Statuses that extended mode reports instead of raising
            timeout: Overall budget in seconds, including retry waits

        Returns:
            The decoded JSON body (None for empty bodies), or an ApiResponse.
        """
        request = build_request(
            path,
            method=method,
            params=params,
            body=body,
            accept=accept,
            token=token,
            additional_headers=additional_headers,
            extended=extended,
            no_status=no_status,
        )
        return self.send(request, observe=observe, skip_cache=skip_cache, timeout=timeout)

    def download(
        self,
        path: str,
        save_path: Path,
        params=None,
        accept: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
    ) -> Path:
        """Stream a GET response body to ``save_path`` instead of decoding it."""
        request = build_request(path, params=params, accept=accept, token=token)
        save_path = Path(save_path)
        self._status(request, f"Downloading {request.path} to {save_path}")
        self._execute(request, self._stream_fetch(save_path), _deadline(timeout))
        return save_path

    # --- pagination ---

    def iter_pages(self, request: RestRequest, skip_cache: bool = False, timeout: float | None = None):
        """Yield one ApiResponse per page, following ``rel="next"`` links.

        Pages are fetched one at a time. A retry only repeats the page that
        failed, never the ones already yielded.
        """
        deadline = _deadline(timeout)
        base_host = httpx.URL(self.base_url).host
        seen: set[str] = set()
        page = 1
        while True:
            self._status(request, f"Fetching page {page} of {request.path}")
            data = self._execute(request, self._pick_fetch(request, skip_cache), deadline)
            yield _envelope(data)

            next_url = parse_link_header(data.get("link")).get("next")
            if not next_url:
                return
            if httpx.URL(next_url).host != base_host:
                raise GitHubError(f"Refusing to follow pagination link to another host: {next_url}")
            if next_url in seen:
                raise GitHubError(f"Pagination loop detected at {next_url}")
            seen.add(next_url)
            request = request.follow(next_url)
            page += 1

    def paginate(
        self,
        path: str,
        method: str = "GET",
        params=None,
        body=None,
        accept: str | None = None,
        token: str | None = None,
        additional_headers: dict | None = None,
        no_status: bool = False,
        skip_cache: bool = False,
        timeout: float | None = None,
    ):
        """Lazily yield every element of a list endpoint across all pages.

        A list body contributes its elements in order; any other body is
        yielded as a single element.
        """
        request = build_request(
            path,
            method=method,
            params=params,
            body=body,
            accept=accept,
            token=token,
            additional_headers=additional_headers,
            no_status=no_status,
        )
        for page in self.iter_pages(request, skip_cache=skip_cache, timeout=timeout):
            if isinstance(page.body, list):
                yield from page.body
            elif page.body is not None:
                yield page.body

    def invoke_multiple(self, path: str, **kwargs) -> list:
        """Fetch every page of a list endpoint. All pages or an exception."""
        return list(self.paginate(path, **kwargs))

    def _request_timeout(self, remaining: float | None):
        if remaining is None:
            return httpx.USE_CLIENT_DEFAULT
        return httpx.Timeout(min(self.settings.github_request_timeout, remaining))

    def _status(self, request: RestRequest, message: str):
        quiet = request.no_status or self.settings.github_no_status
        logger.log(logging.DEBUG if quiet else logging.INFO, message)


def _deadline(timeout: float | None) -> float | None:
    return None if timeout is None else time.monotonic() + timeout


def _remaining(deadline: float | None) -> float | None:
    return None if deadline is None else deadline - time.monotonic()


def _fits(deadline: float | None, wait: float) -> bool:
    return deadline is None or time.monotonic() + wait <= deadline


def _envelope(data: dict) -> ApiResponse:
    return ApiResponse(
        status=data["status"],
        body=data["body"],
        headers=data.get("headers") or {},
        etag=data.get("etag"),
        link=data.get("link"),
    )


# Client instances keyed by config
_clients: dict[tuple, GitHubRestClient] = {}


def get_client(token: str | None = None, cache_dir=None, skip_cache: bool = False) -> GitHubRestClient:
    """Get or create a client with the given configuration."""
    key = (token, str(cache_dir) if cache_dir else None, skip_cache)
    if key not in _clients:
        _clients[key] = GitHubRestClient(token=token, cache_dir=cache_dir, skip_cache=skip_cache)
    return _clients[key]
