"""Classic projects for a repository, organization or user."""

from ..client import get_client
from ..errors import InvalidArgument
from ..repository import resolve_repository
from ..request import PREVIEW_INERTIA, path_for
from ..shaping import shape_many, shape_project
from .base import drop_none, require

PROJECT_STATES = ("open", "closed", "all")


def _owner_path(client, owner, repo, uri, organization, user_name, current_user=False):
    """Collection path plus the repository it belongs to, if any."""
    repo_given = bool(owner or repo or uri)
    if sum((repo_given, bool(organization), bool(user_name), current_user)) > 1:
        raise InvalidArgument("Specify only one of: repository, organization, user_name")
    if organization:
        return path_for("orgs", organization, "projects"), None
    if user_name:
        return path_for("users", user_name, "projects"), None
    if current_user:
        return "user/projects", None
    ref = resolve_repository(owner, repo, uri, settings=client.settings)
    return ref.api_path("projects"), ref


def list_projects(
    owner=None,
    repo=None,
    uri=None,
    organization: str | None = None,
    user_name: str | None = None,
    state: str = "open",
    client=None,
) -> list[dict]:
    if state not in PROJECT_STATES:
        raise InvalidArgument(f"state must be one of {PROJECT_STATES}, got {state!r}")
    client = client or get_client()
    path, ref = _owner_path(client, owner, repo, uri, organization, user_name)
    projects = client.invoke_multiple(
        path, params={"state": state, "per_page": 100}, accept=PREVIEW_INERTIA
    )
    return shape_many(projects, shape_project, ref, client.settings)


def get_project(project_id: int, client=None) -> dict:
    client = client or get_client()
    project = client.invoke(path_for("projects", require(project_id, "project_id")), accept=PREVIEW_INERTIA)
    return shape_project(project, None, client.settings)


def new_project(
    name: str,
    description: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    organization: str | None = None,
    current_user: bool = False,
    client=None,
) -> dict:
    require(name, "name")
    client = client or get_client()
    path, ref = _owner_path(client, owner, repo, uri, organization, None, current_user=current_user)
    project = client.invoke(
        path,
        method="POST",
        body=drop_none(name=name, body=description),
        accept=PREVIEW_INERTIA,
    )
    return shape_project(project, ref, client.settings)


def remove_project(project_id: int, client=None) -> None:
    client = client or get_client()
    client.invoke(
        path_for("projects", require(project_id, "project_id")),
        method="DELETE",
        accept=PREVIEW_INERTIA,
    )
