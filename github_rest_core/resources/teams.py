"""Organization teams and team membership."""

from ..client import get_client
from ..errors import InvalidArgument
from ..repository import resolve_repository
from ..request import path_for
from ..shaping import shape_many, shape_team, shape_user
from .base import require


def list_teams(organization: str | None = None, owner=None, repo=None, uri=None, client=None) -> list[dict]:
    """Teams of an organization, or the teams with access to a repository."""
    client = client or get_client()
    if organization:
        if owner or repo or uri:
            raise InvalidArgument("Specify either organization or a repository, not both")
        path = path_for("orgs", organization, "teams")
    else:
        ref = resolve_repository(owner, repo, uri, settings=client.settings)
        path = ref.api_path("teams")
    teams = client.invoke_multiple(path, params={"per_page": 100})
    return shape_many(teams, shape_team, client.settings)


def _team_path(organization: str, team_slug: str, *rest) -> str:
    return path_for(
        "orgs", require(organization, "organization"), "teams", require(team_slug, "team_slug"), *rest
    )


def get_team(organization: str, team_slug: str, client=None) -> dict:
    client = client or get_client()
    return shape_team(client.invoke(_team_path(organization, team_slug)), client.settings)


def list_team_members(organization: str, team_slug: str, role: str = "all", client=None) -> list[dict]:
    if role not in ("all", "member", "maintainer"):
        raise InvalidArgument(f"role must be all, member or maintainer, got {role!r}")
    client = client or get_client()
    members = client.invoke_multiple(
        _team_path(organization, team_slug, "members"),
        params={"role": role, "per_page": 100},
    )
    return shape_many(members, shape_user, client.settings)
