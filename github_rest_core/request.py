"""Request builder: path, query and body in, immutable request descriptor out."""

import json
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from .errors import InvalidArgument

DEFAULT_ACCEPT = "application/vnd.github.v3+json"
API_VERSION = "2022-11-28"
USER_AGENT = "github-rest-core"

METHODS = ("GET", "POST", "PATCH", "PUT", "DELETE")

# Preview media types for endpoints that were gated behind an Accept header
MEDIA_TYPE_RAW = "application/vnd.github.v3.raw"
PREVIEW_INERTIA = "application/vnd.github.inertia-preview+json"  # projects
PREVIEW_LUKE_CAGE = "application/vnd.github.luke-cage-preview+json"  # branch protection
PREVIEW_MOCKINGBIRD = "application/vnd.github.mockingbird-preview+json"  # timeline
PREVIEW_SQUIRREL_GIRL = "application/vnd.github.squirrel-girl-preview+json"  # reactions
PREVIEW_SYMMETRA = "application/vnd.github.symmetra-preview+json"  # labels
PREVIEW_SAILOR_V = "application/vnd.github.sailor-v-preview+json"  # issue locking


def path_for(*segments) -> str:
    """Join path segments, escaping each one so a value can't inject a slash."""
    parts = []
    for seg in segments:
        if seg is None or str(seg) == "":
            raise InvalidArgument(f"Empty path segment in {segments!r}")
        parts.append(quote(str(seg), safe=""))
    return "/".join(parts)


def normalize_path(path: str) -> str:
    if path is None or not str(path).strip():
        raise InvalidArgument("Request path must not be empty")
    path = str(path).strip()
    if path.startswith(("http://", "https://")):
        return path
    parts = [p for p in path.split("/") if p]
    if not parts:
        raise InvalidArgument("Request path must not be empty")
    return "/".join(parts)


def _query_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def normalize_params(params) -> tuple[tuple[str, str], ...]:
    if not params:
        return ()
    items = params.items() if isinstance(params, dict) else params
    out = []
    for key, value in items:
        if value is None:
            continue
        out.append((str(key), _query_value(value)))
    return tuple(out)


@dataclass(frozen=True)
class RestRequest:
    """Everything needed to issue one REST call.

    ``path`` is either a path relative to the API root or, for pagination
    follow-ups, an absolute URL taken from a ``Link`` header.
    """

    method: str
    path: str
    params: tuple[tuple[str, str], ...] = ()
    body: object = None
    accept: str = DEFAULT_ACCEPT
    token: str | None = None
    additional_headers: tuple[tuple[str, str], ...] = ()
    extended: bool = False
    no_status: bool = False

    @property
    def is_absolute(self) -> bool:
        return self.path.startswith(("http://", "https://"))

    def url(self, base_url: str) -> str:
        if self.is_absolute:
            url = httpx.URL(self.path)
        else:
            url = httpx.URL(f"{base_url.rstrip('/')}/{self.path}")
        if self.params:
            url = url.copy_merge_params(list(self.params))
        return str(url)

    def headers(self, default_token: str | None = None) -> dict[str, str]:
        headers = {
            "Accept": self.accept,
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": API_VERSION,
        }
        token = self.token or default_token
        if token:
            headers["Authorization"] = f"token {token}"
        if self.body is not None:
            headers["Content-Type"] = "application/json; charset=utf-8"
        headers.update(dict(self.additional_headers))
        return headers

    def content(self) -> bytes | None:
        if self.body is None:
            return None
        return json.dumps(self.body).encode("utf-8")

    def follow(self, url: str) -> "RestRequest":
        """Same call against a ``next`` link. The link already carries the query."""
        return RestRequest(
            method=self.method,
            path=url,
            accept=self.accept,
            token=self.token,
            additional_headers=self.additional_headers,
            extended=self.extended,
            no_status=self.no_status,
        )


def build_request(
    path: str,
    method: str = "GET",
    params=None,
    body=None,
    accept: str | None = None,
    token: str | None = None,
    additional_headers: dict | None = None,
    extended: bool = False,
    no_status: bool = False,
) -> RestRequest:
    """Build a `RestRequest`.

    Args:
        path: API path such as "repos/owner/repo/issues"; a leading slash is fine.
        method: HTTP method.
        params: Query parameters, dict or ordered pairs. None values are dropped.
        body: JSON-serializable payload. Omitted from the request when None.
        accept: Accept header override for preview media types.
        token: Per-call token; falls back to the client's default.
    """
    method = (method or "").upper()
    if method not in METHODS:
        raise InvalidArgument(f"Unsupported HTTP method: {method!r}")
    if body is not None:
        try:
            json.dumps(body)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Request body is not JSON-serializable: {e}") from e
    return RestRequest(
        method=method,
        path=normalize_path(path),
        params=normalize_params(params),
        body=body,
        accept=accept or DEFAULT_ACCEPT,
        token=token,
        additional_headers=tuple((additional_headers or {}).items()),
        extended=extended,
        no_status=no_status,
    )
