"""Git references (branches and tags as refs)."""

from ..shaping import shape_many, shape_reference
from .base import repository_context, require, split_path


def _ref_parts(reference: str) -> list[str]:
    """Split a ref name, dropping a leading "refs/" (refs/heads/main -> heads, main)."""
    parts = split_path(require(reference, "reference"))
    if parts[0] == "refs":
        parts = parts[1:]
    return split_path("/".join(parts))


def get_reference(reference: str, owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    result = client.invoke(ref.api_path("git", "ref", *_ref_parts(reference)))
    return shape_reference(result, ref, client.settings)


def list_references(prefix: str = "", owner=None, repo=None, uri=None, client=None) -> list[dict]:
    """All refs, or those matching ``prefix`` such as "heads" or "tags/v1"."""
    client, ref = repository_context(client, owner, repo, uri)
    if prefix:
        path = ref.api_path("git", "matching-refs", *_ref_parts(prefix))
    else:
        path = ref.api_path("git", "refs")
    refs = client.invoke_multiple(path, params={"per_page": 100})
    return shape_many(refs, shape_reference, ref, client.settings)


def new_reference(reference: str, sha: str, owner=None, repo=None, uri=None, client=None) -> dict:
    require(sha, "sha")
    client, ref = repository_context(client, owner, repo, uri)
    full = "refs/" + "/".join(_ref_parts(reference))
    result = client.invoke(ref.api_path("git", "refs"), method="POST", body={"ref": full, "sha": sha})
    return shape_reference(result, ref, client.settings)


def update_reference(
    reference: str, sha: str, force: bool = False, owner=None, repo=None, uri=None, client=None
) -> dict:
    require(sha, "sha")
    client, ref = repository_context(client, owner, repo, uri)
    result = client.invoke(
        ref.api_path("git", "refs", *_ref_parts(reference)),
        method="PATCH",
        body={"sha": sha, "force": force},
    )
    return shape_reference(result, ref, client.settings)


def remove_reference(reference: str, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(ref.api_path("git", "refs", *_ref_parts(reference)), method="DELETE")
