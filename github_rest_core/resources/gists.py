"""Gists, including the starred check."""

from ..client import get_client
from ..errors import InvalidArgument
from ..request import path_for
from ..shaping import shape_gist, shape_many
from .base import drop_none, require


def get_gist(gist_id: str, sha: str | None = None, client=None) -> dict:
    client = client or get_client()
    segments = ["gists", require(gist_id, "gist_id")]
    if sha:
        segments.append(sha)
    return shape_gist(client.invoke(path_for(*segments)), client.settings)


def list_gists(
    user_name: str | None = None,
    starred: bool = False,
    public: bool = False,
    since: str | None = None,
    client=None,
) -> list[dict]:
    """The caller's gists, another user's, the caller's starred ones, or all public gists."""
    if sum(bool(x) for x in (user_name, starred, public)) > 1:
        raise InvalidArgument("Specify at most one of: user_name, starred, public")
    client = client or get_client()
    if user_name:
        path = path_for("users", user_name, "gists")
    elif starred:
        path = "gists/starred"
    elif public:
        path = "gists/public"
    else:
        path = "gists"
    gists = client.invoke_multiple(path, params=drop_none(since=since, per_page=100))
    return shape_many(gists, shape_gist, client.settings)


def new_gist(
    files: dict[str, str],
    description: str | None = None,
    public: bool = False,
    client=None,
) -> dict:
    """Create a gist from ``{filename: content}``."""
    if not files:
        raise InvalidArgument("A gist needs at least one file")
    empty = [name for name, content in files.items() if not content]
    if empty:
        raise InvalidArgument(f"Gist files must not be empty: {', '.join(empty)}")
    client = client or get_client()
    payload = drop_none(
        files={name: {"content": content} for name, content in files.items()},
        description=description,
        public=public,
    )
    return shape_gist(client.invoke("gists", method="POST", body=payload), client.settings)


def remove_gist(gist_id: str, client=None) -> None:
    client = client or get_client()
    client.invoke(path_for("gists", require(gist_id, "gist_id")), method="DELETE")


def star_gist(gist_id: str, client=None) -> None:
    client = client or get_client()
    client.invoke(path_for("gists", require(gist_id, "gist_id"), "star"), method="PUT")


def unstar_gist(gist_id: str, client=None) -> None:
    client = client or get_client()
    client.invoke(path_for("gists", require(gist_id, "gist_id"), "star"), method="DELETE")


def is_gist_starred(gist_id: str, client=None) -> bool:
    """GitHub answers 204 when starred and 404 when not.

    Only the 404 means "not starred"; network failures and any other error
    status still raise.
    """
    client = client or get_client()
    resp = client.invoke(
        path_for("gists", require(gist_id, "gist_id"), "star"),
        extended=True,
        observe=(404,),
    )
    return resp.status == 204
