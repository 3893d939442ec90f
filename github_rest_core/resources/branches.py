"""Branches, created and removed through git refs."""

from ..request import PREVIEW_LUKE_CAGE
from ..shaping import shape_branch, shape_many
from .base import drop_none, repository_context, require, split_path


def list_branches(protected: bool | None = None, owner=None, repo=None, uri=None, client=None) -> list[dict]:
    client, ref = repository_context(client, owner, repo, uri)
    branches = client.invoke_multiple(
        ref.api_path("branches"), params=drop_none(protected=protected, per_page=100)
    )
    return shape_many(branches, shape_branch, ref, client.settings)


def get_branch(name: str, owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    branch = client.invoke(ref.api_path("branches", *split_path(name)))
    return shape_branch(branch, ref, client.settings)


def new_branch(
    name: str,
    origin_branch: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    """Create ``name`` pointing at the head of ``origin_branch``.

    Without ``origin_branch`` the repository's default branch is used.
    """
    require(name, "name")
    client, ref = repository_context(client, owner, repo, uri)
    if not origin_branch:
        origin_branch = client.invoke(ref.api_path())["default_branch"]
    origin = client.invoke(ref.api_path("git", "ref", "heads", *split_path(origin_branch)))
    created = client.invoke(
        ref.api_path("git", "refs"),
        method="POST",
        body={"ref": f"refs/heads/{name}", "sha": origin["object"]["sha"]},
    )
    return shape_branch(created, ref, client.settings)


def remove_branch(name: str, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(ref.api_path("git", "refs", "heads", *split_path(name)), method="DELETE")


def get_branch_protection(name: str, owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    protection = client.invoke(
        ref.api_path("branches", *split_path(name), "protection"),
        accept=PREVIEW_LUKE_CAGE,
    )
    return {**protection, "branch_name": name}
