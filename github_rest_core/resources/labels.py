"""Repository labels and the labels attached to issues."""

import re

from ..errors import InvalidArgument
from ..request import PREVIEW_SYMMETRA
from ..shaping import shape_label, shape_many
from .base import drop_none, repository_context, require

_COLOR_RE = re.compile(r"^[0-9a-fA-F]{6}$")


def _color(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.lstrip("#")
    if not _COLOR_RE.match(value):
        raise InvalidArgument(f"Label color must be six hex digits, got {value!r}")
    return value.lower()


def list_labels(issue: int | None = None, owner=None, repo=None, uri=None, client=None) -> list[dict]:
    client, ref = repository_context(client, owner, repo, uri)
    path = ref.api_path("labels") if issue is None else ref.api_path("issues", issue, "labels")
    labels = client.invoke_multiple(path, params={"per_page": 100}, accept=PREVIEW_SYMMETRA)
    return shape_many(labels, shape_label, ref, client.settings)


def get_label(name: str, owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    label = client.invoke(ref.api_path("labels", require(name, "name")), accept=PREVIEW_SYMMETRA)
    return shape_label(label, ref, client.settings)


def new_label(
    name: str,
    color: str = "EEEEEE",
    description: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    require(name, "name")
    client, ref = repository_context(client, owner, repo, uri)
    payload = drop_none(name=name, color=_color(color), description=description)
    label = client.invoke(ref.api_path("labels"), method="POST", body=payload, accept=PREVIEW_SYMMETRA)
    return shape_label(label, ref, client.settings)


def update_label(
    name: str,
    new_name: str | None = None,
    color: str | None = None,
    description: str | None = None,
    owner=None,
    repo=None,
    uri=None,
    client=None,
) -> dict:
    payload = drop_none(new_name=new_name, color=_color(color), description=description)
    if not payload:
        raise InvalidArgument("Nothing to update")
    client, ref = repository_context(client, owner, repo, uri)
    label = client.invoke(
        ref.api_path("labels", require(name, "name")),
        method="PATCH",
        body=payload,
        accept=PREVIEW_SYMMETRA,
    )
    return shape_label(label, ref, client.settings)


def remove_label(name: str, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(ref.api_path("labels", require(name, "name")), method="DELETE", accept=PREVIEW_SYMMETRA)


def add_issue_labels(issue: int, labels: list[str] | str, owner=None, repo=None, uri=None, client=None) -> list[dict]:
    if isinstance(labels, str):
        labels = [labels]
    if not labels:
        raise InvalidArgument("labels must not be empty")
    client, ref = repository_context(client, owner, repo, uri)
    result = client.invoke(
        ref.api_path("issues", require(issue, "issue"), "labels"),
        method="POST",
        body={"labels": list(labels)},
        accept=PREVIEW_SYMMETRA,
    )
    return shape_many(result, shape_label, ref, client.settings)


def remove_issue_label(issue: int, name: str, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(
        ref.api_path("issues", require(issue, "issue"), "labels", require(name, "name")),
        method="DELETE",
        accept=PREVIEW_SYMMETRA,
    )
