"""Issue and pull request comments."""

from ..shaping import shape_comment, shape_many
from .base import drop_none, repository_context, require


def list_comments(
    issue: int | None = None,
    since: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> list[dict]:
    """Comments on one issue, or on every issue in the repository."""
    client, ref = repository_context(client, owner, repo, uri)
    if issue is None:
        path = ref.api_path("issues", "comments")
        params = drop_none(since=since, sort=sort, direction=direction, per_page=100)
    else:
        # sort/direction only apply to the repository-wide listing
        path = ref.api_path("issues", issue, "comments")
        params = drop_none(since=since, per_page=100)
    comments = client.invoke_multiple(path, params=params)
    return shape_many(comments, shape_comment, ref, client.settings)


def get_comment(comment_id: int, owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    comment = client.invoke(ref.api_path("issues", "comments", require(comment_id, "comment_id")))
    return shape_comment(comment, ref, client.settings)


def new_comment(issue: int, body: str, owner=None, repo=None, uri=None, client=None) -> dict:
    require(body, "body")
    client, ref = repository_context(client, owner, repo, uri)
    comment = client.invoke(
        ref.api_path("issues", require(issue, "issue"), "comments"),
        method="POST",
        body={"body": body},
    )
    return shape_comment(comment, ref, client.settings)


def update_comment(comment_id: int, body: str, owner=None, repo=None, uri=None, client=None) -> dict:
    require(body, "body")
    client, ref = repository_context(client, owner, repo, uri)
    comment = client.invoke(
        ref.api_path("issues", "comments", require(comment_id, "comment_id")),
        method="PATCH",
        body={"body": body},
    )
    return shape_comment(comment, ref, client.settings)


def remove_comment(comment_id: int, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(ref.api_path("issues", "comments", require(comment_id, "comment_id")), method="DELETE")
