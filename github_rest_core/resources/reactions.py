"""Reactions on issues and issue comments."""

from ..errors import InvalidArgument
from ..request import PREVIEW_SQUIRREL_GIRL
from ..shaping import shape_many, shape_reaction
from .base import drop_none, one_of, repository_context, require

REACTIONS = ("+1", "-1", "laugh", "confused", "heart", "hooray", "rocket", "eyes")


def _reaction(content: str) -> str:
    if content not in REACTIONS:
        raise InvalidArgument(f"reaction must be one of {REACTIONS}, got {content!r}")
    return content


def _subject_path(ref, issue, comment_id, *rest) -> str:
    kind, value = one_of(issue=issue, comment_id=comment_id)
    if kind == "issue":
        return ref.api_path("issues", value, "reactions", *rest)
    return ref.api_path("issues", "comments", value, "reactions", *rest)


def list_reactions(
    issue: int | None = None,
    comment_id: int | None = None,
    content: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> list[dict]:
    if content is not None:
        _reaction(content)
    client, ref = repository_context(client, owner, repo, uri)
    reactions = client.invoke_multiple(
        _subject_path(ref, issue, comment_id),
        params=drop_none(content=content, per_page=100),
        accept=PREVIEW_SQUIRREL_GIRL,
    )
    return shape_many(reactions, shape_reaction, ref, client.settings)


def add_reaction(
    content: str,
    issue: int | None = None,
    comment_id: int | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    _reaction(content)
    client, ref = repository_context(client, owner, repo, uri)
    reaction = client.invoke(
        _subject_path(ref, issue, comment_id),
        method="POST",
        body={"content": content},
        accept=PREVIEW_SQUIRREL_GIRL,
    )
    return shape_reaction(reaction, ref, client.settings)


def remove_reaction(
    reaction_id: int,
    issue: int | None = None,
    comment_id: int | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(
        _subject_path(ref, issue, comment_id, require(reaction_id, "reaction_id")),
        method="DELETE",
        accept=PREVIEW_SQUIRREL_GIRL,
    )
