"""Error taxonomy for GitHub REST calls.

Every non-2xx response is classified into one of the `GitHubApiError`
subclasses below. The server-provided ``message`` is kept verbatim so callers
can show it to users; ``errors`` keeps GitHub's field-level error list.
"""

import json
from datetime import datetime, timezone

import httpx


class GitHubError(Exception):
    """Base class for everything this package raises."""


class InvalidArgument(GitHubError, ValueError):
    """A call was malformed before any network I/O happened."""


class TransportError(GitHubError):
    """Network, TLS or timeout failure that survived the retry budget."""


class GitHubApiError(GitHubError):
    """GitHub answered with a non-success status."""

    kind = "Unclassified"

    def __init__(
        self,
        status: int,
        message: str,
        errors: list | None = None,
        documentation_url: str | None = None,
        request_id: str | None = None,
        headers: dict | None = None,
    ):
        self.status = status
        self.message = message
        self.errors = errors or []
        self.documentation_url = documentation_url
        self.request_id = request_id
        self.headers = headers or {}
        super().__init__(self._render())

    def _render(self) -> str:
        text = f"{self.kind} ({self.status}): {self.message}"
        details = [_format_field_error(e) for e in self.errors]
        if details:
            text += " [" + "; ".join(details) + "]"
        if self.request_id:
            text += f" (request id {self.request_id})"
        return text


class AuthenticationRequired(GitHubApiError):
    kind = "AuthenticationRequired"


class NotFound(GitHubApiError):
    kind = "NotFound"


class Conflict(GitHubApiError):
    kind = "Conflict"


class ValidationFailed(GitHubApiError):
    kind = "ValidationFailed"

    @property
    def field_errors(self) -> list:
        return self.errors


class RateLimited(GitHubApiError):
    kind = "RateLimited"

    def __init__(
        self,
        status: int,
        message: str,
        reset_at: datetime | None = None,
        retry_after: float | None = None,
        **kwargs,
    ):
        self.reset_at = reset_at
        self.retry_after = retry_after
        super().__init__(status, message, **kwargs)

    def _render(self) -> str:
        text = super()._render()
        if self.reset_at is not None:
            text += f" Resets at {self.reset_at.isoformat()}."
        return text

    def wait_seconds(self, now: float) -> float | None:
        """Seconds to wait before retrying, None when the server gave no hint."""
        if self.retry_after is not None:
            return max(0.0, self.retry_after)
        if self.reset_at is not None:
            return max(0.0, self.reset_at.timestamp() - now)
        return None


class ServerError(GitHubApiError):
    kind = "ServerError"


class UnclassifiedError(GitHubApiError):
    kind = "Unclassified"


_BY_STATUS = {
    401: AuthenticationRequired,
    404: NotFound,
    409: Conflict,
    422: ValidationFailed,
}


def _format_field_error(error) -> str:
    if not isinstance(error, dict):
        return str(error)
    if error.get("message"):
        return str(error["message"])
    parts = [f"{k}={error[k]}" for k in ("resource", "field", "code") if error.get(k)]
    return ", ".join(parts) or json.dumps(error, sort_keys=True)


def _parse_error_body(body_text: str) -> dict:
    if not body_text:
        return {}
    try:
        data = json.loads(body_text)
    except ValueError:
        return {"message": body_text.strip()}
    return data if isinstance(data, dict) else {}


def _parse_reset(headers: httpx.Headers) -> datetime | None:
    val = headers.get("x-ratelimit-reset")
    if val is None:
        return None
    try:
        return datetime.fromtimestamp(float(val), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def _parse_retry_after(headers: httpx.Headers) -> float | None:
    val = headers.get("retry-after")
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        return None


def is_rate_limited(status: int, headers, message: str = "") -> bool:
    """True when a 403/429 response is a primary or secondary rate limit."""
    if status not in (403, 429):
        return False
    headers = httpx.Headers(headers)
    if status == 429:
        return True
    if headers.get("x-ratelimit-remaining") == "0":
        return True
    if "retry-after" in headers:
        return True
    return "rate limit" in message.lower()


def classify_response(status: int, headers, body_text: str = "") -> GitHubApiError:
    """Build the exception that describes a non-2xx response."""
    headers = httpx.Headers(headers)
    data = _parse_error_body(body_text)
    message = data.get("message") or f"HTTP {status}"
    kwargs = {
        "errors": data.get("errors") if isinstance(data.get("errors"), list) else None,
        "documentation_url": data.get("documentation_url"),
        "request_id": headers.get("x-github-request-id"),
        "headers": dict(headers),
    }

    if is_rate_limited(status, headers, message):
        return RateLimited(
            status,
            message,
            reset_at=_parse_reset(headers),
            retry_after=_parse_retry_after(headers),
            **kwargs,
        )
    if status in _BY_STATUS:
        return _BY_STATUS[status](status, message, **kwargs)
    if status >= 500:
        return ServerError(status, message, **kwargs)
    return UnclassifiedError(status, message, **kwargs)
