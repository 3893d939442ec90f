"""GitHub REST API client core and thin resource operations.

One client handles auth, rate-limit and network retries, Link-header
pagination and error classification. Resource modules build paths and bodies
on top of it.
"""

from .cli import main
from .client import GitHubRestClient, get_client, parse_link_header
from .errors import (
    AuthenticationRequired,
    Conflict,
    GitHubApiError,
    GitHubError,
    InvalidArgument,
    NotFound,
    RateLimited,
    ServerError,
    TransportError,
    UnclassifiedError,
    ValidationFailed,
)
from .models import ApiResponse
from .request import RestRequest, build_request

__all__ = [
    "main",
    "GitHubRestClient",
    "get_client",
    "parse_link_header",
    "ApiResponse",
    "RestRequest",
    "build_request",
    "GitHubError",
    "GitHubApiError",
    "InvalidArgument",
    "AuthenticationRequired",
    "NotFound",
    "Conflict",
    "ValidationFailed",
    "RateLimited",
    "ServerError",
    "TransportError",
    "UnclassifiedError",
]

if __name__ == "__main__":
    main()
