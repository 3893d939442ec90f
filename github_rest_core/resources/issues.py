"""Issues: get, list, create, update, lock."""

from ..errors import InvalidArgument
from ..request import PREVIEW_SAILOR_V
from ..shaping import shape_issue, shape_many
from .base import drop_none, repository_context, require

ISSUE_STATES = ("open", "closed", "all")
LOCK_REASONS = ("off-topic", "too heated", "resolved", "spam")


def get_issue(number: int, owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    issue = client.invoke(ref.api_path("issues", require(number, "number")))
    return shape_issue(issue, ref, client.settings)


def list_issues(
    owner=None,
    repo=None,
    uri=None,
    state: str = "open",
    labels: list[str] | None = None,
    assignee: str | None = None,
    creator: str | None = None,
    mentioned: str | None = None,
    milestone: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    since: str | None = None,
    client=None,
) -> list[dict]:
    if state not in ISSUE_STATES:
        raise InvalidArgument(f"state must be one of {ISSUE_STATES}, got {state!r}")
    client, ref = repository_context(client, owner, repo, uri)
    params = {
        "state": state,
        "labels": labels,
        "assignee": assignee,
        "creator": creator,
        "mentioned": mentioned,
        "milestone": milestone,
        "sort": sort,
        "direction": direction,
        "since": since,
        "per_page": 100,
    }
    issues = client.invoke_multiple(ref.api_path("issues"), params=params)
    return shape_many(issues, shape_issue, ref, client.settings)


def new_issue(
    title: str,
    body: str | None = None,
    assignees: list[str] | None = None,
    labels: list[str] | None = None,
    milestone: int | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    require(title, "title")
    client, ref = repository_context(client, owner, repo, uri)
    payload = drop_none(title=title, body=body, assignees=assignees, labels=labels, milestone=milestone)
    issue = client.invoke(ref.api_path("issues"), method="POST", body=payload)
    return shape_issue(issue, ref, client.settings)


def update_issue(
    number: int,
    title: str | None = None,
    body: str | None = None,
    state: str | None = None,
    state_reason: str | None = None,
    assignees: list[str] | None = None,
    labels: list[str] | None = None,
    milestone: int | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    if state is not None and state not in ("open", "closed"):
        raise InvalidArgument(f"state must be 'open' or 'closed', got {state!r}")
    payload = drop_none(
        title=title,
        body=body,
        state=state,
        state_reason=state_reason,
        assignees=assignees,
        labels=labels,
        milestone=milestone,
    )
    if not payload:
        raise InvalidArgument("Nothing to update")
    client, ref = repository_context(client, owner, repo, uri)
    issue = client.invoke(ref.api_path("issues", require(number, "number")), method="PATCH", body=payload)
    return shape_issue(issue, ref, client.settings)


def lock_issue(number: int, reason: str | None = None, owner=None, repo=None, uri=None, client=None) -> None:
    if reason is not None and reason not in LOCK_REASONS:
        raise InvalidArgument(f"reason must be one of {LOCK_REASONS}, got {reason!r}")
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(
        ref.api_path("issues", require(number, "number"), "lock"),
        method="PUT",
        body={"lock_reason": reason} if reason else None,
        accept=PREVIEW_SAILOR_V,
    )


def unlock_issue(number: int, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(
        ref.api_path("issues", require(number, "number"), "lock"),
        method="DELETE",
        accept=PREVIEW_SAILOR_V,
    )
