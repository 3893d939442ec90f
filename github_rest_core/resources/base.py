"""Plumbing shared by the resource functions."""

from ..client import GitHubRestClient, get_client
from ..errors import InvalidArgument
from ..repository import RepositoryRef, resolve_repository


def repository_context(
    client: GitHubRestClient | None,
    owner: str | None = None,
    repo: str | None = None,
    uri: str | None = None,
) -> tuple[GitHubRestClient, RepositoryRef]:
    client = client or get_client()
    return client, resolve_repository(owner, repo, uri, settings=client.settings)


def split_path(value: str) -> list[str]:
    """Slash-separated name (branch, ref, file path) as escaped-per-segment parts."""
    parts = [p for p in (value or "").split("/") if p]
    if not parts:
        raise InvalidArgument(f"Empty path: {value!r}")
    return parts


def one_of(**choices):
    """Return the single (name, value) pair that was supplied."""
    given = [(k, v) for k, v in choices.items() if v]
    if len(given) != 1:
        names = ", ".join(choices)
        raise InvalidArgument(f"Specify exactly one of: {names}")
    return given[0]


def require(value, name: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument(f"{name} is required")
    return value


def drop_none(**fields) -> dict:
    return {k: v for k, v in fields.items() if v is not None}
