"""Repository file contents."""

import base64

from ..errors import Conflict, InvalidArgument, ValidationFailed
from ..request import MEDIA_TYPE_RAW
from ..shaping import add_repository_url
from .base import drop_none, repository_context, require, split_path


def get_content(
    path: str = "",
    ref_name: str | None = None,
    raw: bool = False,
    owner=None,
    repo=None,
    uri=None,
    client=None,
):
    """File metadata (with base64 content), a directory listing, or raw text when ``raw``."""
    client, ref = repository_context(client, owner, repo, uri)
    segments = split_path(path) if path else []
    result = client.invoke(
        ref.api_path("contents", *segments),
        params=drop_none(ref=ref_name),
        accept=MEDIA_TYPE_RAW if raw else None,
    )
    if raw:
        return result
    if isinstance(result, list):
        return [add_repository_url(item, ref, client.settings) for item in result]
    return add_repository_url(result, ref, client.settings)


def set_content(
    path: str,
    content: str | bytes,
    message: str,
    sha: str | None = None,
    branch: str | None = None,
    committer_name: str | None = None,
    committer_email: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    """Create a file, or update it when ``sha`` names the blob being replaced.

    Updating an existing file without its ``sha`` is rejected by GitHub; that
    rejection is raised as `Conflict` carrying GitHub's own message.
    """
    require(message, "message")
    if content is None:
        raise InvalidArgument("content is required")
    if (committer_name is None) != (committer_email is None):
        raise InvalidArgument("committer_name and committer_email go together")
    raw = content.encode("utf-8") if isinstance(content, str) else content
    payload = drop_none(
        message=message,
        content=base64.b64encode(raw).decode("ascii"),
        sha=sha,
        branch=branch,
        committer={"name": committer_name, "email": committer_email} if committer_name else None,
    )
    client, ref = repository_context(client, owner, repo, uri)
    try:
        result = client.invoke(ref.api_path("contents", *split_path(path)), method="PUT", body=payload)
    except ValidationFailed as e:
        if sha is None and '"sha" wasn\'t supplied' in e.message:
            raise Conflict(
                e.status,
                e.message,
                errors=e.errors,
                documentation_url=e.documentation_url,
                request_id=e.request_id,
                headers=e.headers,
            ) from e
        raise
    return add_repository_url(result, ref, client.settings)
