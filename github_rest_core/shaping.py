"""Convenience keys added to decoded objects after the core returns them.

The client itself never shapes results. Resource functions compose these
helpers over whatever came back so downstream code can chain calls, e.g. pass
an issue straight into a comment call using ``issue_number`` and
``repository_html_url``. Nothing here runs when pipeline support is disabled
in settings.
"""

from .repository import RepositoryRef, parse_repository_uri
from .settings import Settings, get_settings


def _enabled(settings: Settings | None) -> bool:
    settings = settings or get_settings()
    return not settings.github_disable_pipeline_support


def _repo_html_url(obj: dict, ref: RepositoryRef | None, settings: Settings | None) -> str | None:
    web_base_url = (settings or get_settings()).web_base_url
    if ref is not None:
        return ref.html_url(web_base_url)
    # Issues and comments carry the API repository URL
    api_url = obj.get("repository_url")
    if api_url:
        return parse_repository_uri(api_url).html_url(web_base_url)
    return None


def add_repository_url(obj: dict, ref: RepositoryRef | None, settings: Settings | None = None) -> dict:
    if not _enabled(settings) or not isinstance(obj, dict):
        return obj
    url = _repo_html_url(obj, ref, settings)
    if url is None:
        return obj
    return {**obj, "repository_html_url": url}


def shape_user(user: dict | None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(user, dict):
        return user
    return {**user, "user_name": user.get("login"), "user_id": user.get("id")}


def shape_label(label: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(label, dict):
        return label
    shaped = {**label, "label_id": label.get("id"), "label_name": label.get("name")}
    return add_repository_url(shaped, ref, settings)


def shape_issue(issue: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(issue, dict):
        return issue
    shaped = {
        **issue,
        "issue_id": issue.get("id"),
        "issue_number": issue.get("number"),
        "is_pull_request": "pull_request" in issue,
    }
    for key in ("user", "assignee", "closed_by"):
        if shaped.get(key):
            shaped[key] = shape_user(shaped[key], settings)
    if shaped.get("assignees"):
        shaped["assignees"] = [shape_user(u, settings) for u in shaped["assignees"]]
    if shaped.get("labels"):
        shaped["labels"] = [shape_label(lbl, ref, settings) for lbl in shaped["labels"]]
    return add_repository_url(shaped, ref, settings)


def shape_comment(comment: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(comment, dict):
        return comment
    shaped = {**comment, "comment_id": comment.get("id")}
    if shaped.get("user"):
        shaped["user"] = shape_user(shaped["user"], settings)
    # issue_url ends with /issues/{number}
    issue_url = comment.get("issue_url") or ""
    tail = issue_url.rstrip("/").rsplit("/", 1)[-1]
    if tail.isdigit():
        shaped["issue_number"] = int(tail)
    return add_repository_url(shaped, ref, settings)


def shape_gist(gist: dict, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(gist, dict):
        return gist
    shaped = {**gist, "gist_id": gist.get("id")}
    if shaped.get("owner"):
        shaped["owner"] = shape_user(shaped["owner"], settings)
    return shaped


def shape_branch(branch: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(branch, dict):
        return branch
    name = branch.get("name")
    if name is None and branch.get("ref", "").startswith("refs/heads/"):
        name = branch["ref"][len("refs/heads/"):]
    sha = (branch.get("commit") or branch.get("object") or {}).get("sha")
    shaped = {**branch, "branch_name": name, "sha": sha}
    return add_repository_url(shaped, ref, settings)


def shape_team(team: dict, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(team, dict):
        return team
    shaped = {**team, "team_id": team.get("id"), "team_name": team.get("name")}
    organization = team.get("organization") or {}
    if organization.get("login"):
        shaped["organization_name"] = organization["login"]
    return shaped


def shape_project(project: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(project, dict):
        return project
    shaped = {**project, "project_id": project.get("id"), "project_name": project.get("name")}
    if shaped.get("creator"):
        shaped["creator"] = shape_user(shaped["creator"], settings)
    return add_repository_url(shaped, ref, settings)


def shape_reference(reference: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(reference, dict):
        return reference
    full = reference.get("ref", "")
    shaped = {
        **reference,
        "reference_name": full.split("/", 2)[-1] if full.startswith("refs/") else full,
        "sha": (reference.get("object") or {}).get("sha"),
    }
    return add_repository_url(shaped, ref, settings)


def shape_reaction(reaction: dict, ref: RepositoryRef | None = None, settings: Settings | None = None):
    if not _enabled(settings) or not isinstance(reaction, dict):
        return reaction
    shaped = {**reaction, "reaction_id": reaction.get("id")}
    if shaped.get("user"):
        shaped["user"] = shape_user(shaped["user"], settings)
    return add_repository_url(shaped, ref, settings)


def shape_many(items, shape, *args, **kwargs) -> list:
    """Apply ``shape`` to each item of a list result."""
    return [shape(item, *args, **kwargs) for item in items]
