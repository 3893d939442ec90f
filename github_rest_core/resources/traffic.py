"""Repository traffic: referrers, popular paths, views and clones."""

from ..errors import InvalidArgument
from ..shaping import add_repository_url
from .base import repository_context


def _per(per: str) -> str:
    if per not in ("day", "week"):
        raise InvalidArgument(f"per must be 'day' or 'week', got {per!r}")
    return per


def get_referrer_traffic(owner=None, repo=None, uri=None, client=None) -> list[dict]:
    client, ref = repository_context(client, owner, repo, uri)
    referrers = client.invoke(ref.api_path("traffic", "popular", "referrers"))
    return [add_repository_url(r, ref, client.settings) for r in referrers]


def get_path_traffic(owner=None, repo=None, uri=None, client=None) -> list[dict]:
    client, ref = repository_context(client, owner, repo, uri)
    paths = client.invoke(ref.api_path("traffic", "popular", "paths"))
    return [add_repository_url(p, ref, client.settings) for p in paths]


def get_view_traffic(per: str = "day", owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    views = client.invoke(ref.api_path("traffic", "views"), params={"per": _per(per)})
    return add_repository_url(views, ref, client.settings)


def get_clone_traffic(per: str = "day", owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    clones = client.invoke(ref.api_path("traffic", "clones"), params={"per": _per(per)})
    return add_repository_url(clones, ref, client.settings)
