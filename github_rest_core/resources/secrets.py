"""GitHub Actions repository secrets.

Values are sealed client-side against the repository's public key, so the
plaintext never leaves this process.
"""

import re

from ..errors import InvalidArgument
from ..sealed_box import encrypt_secret
from ..shaping import add_repository_url
from .base import repository_context, require

_SECRET_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _secret_name(name: str) -> str:
    require(name, "name")
    if not _SECRET_NAME_RE.match(name) or name.upper().startswith("GITHUB_"):
        raise InvalidArgument(
            f"Invalid secret name {name!r}: use letters, digits and underscores, "
            "don't start with a digit or GITHUB_"
        )
    return name


def get_secret_public_key(owner=None, repo=None, uri=None, client=None) -> dict:
    client, ref = repository_context(client, owner, repo, uri)
    return client.invoke(ref.api_path("actions", "secrets", "public-key"))


def list_secrets(owner=None, repo=None, uri=None, client=None) -> list[dict]:
    client, ref = repository_context(client, owner, repo, uri)
    secrets = []
    # Each page is {"total_count": n, "secrets": [...]}
    for page in client.paginate(ref.api_path("actions", "secrets"), params={"per_page": 100}):
        secrets.extend(page.get("secrets", []))
    return [add_repository_url(s, ref, client.settings) for s in secrets]


def set_secret(name: str, value: str, owner=None, repo=None, uri=None, client=None) -> None:
    """Create or replace a secret."""
    name = _secret_name(name)
    if value is None:
        raise InvalidArgument("value is required")
    client, ref = repository_context(client, owner, repo, uri)
    # The key rotates
    key = client.invoke(ref.api_path("actions", "secrets", "public-key"), skip_cache=True)
    client.invoke(
        ref.api_path("actions", "secrets", name),
        method="PUT",
        body={"encrypted_value": encrypt_secret(key["key"], value), "key_id": key["key_id"]},
    )


def remove_secret(name: str, owner=None, repo=None, uri=None, client=None) -> None:
    client, ref = repository_context(client, owner, repo, uri)
    client.invoke(ref.api_path("actions", "secrets", _secret_name(name)), method="DELETE")
