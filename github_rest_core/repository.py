"""Resolve the repository a call targets into a canonical owner/name pair."""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

from .errors import InvalidArgument
from .request import path_for
from .settings import Settings, get_settings

_SSH_RE = re.compile(r"^git@(?P<host>[^:]+):(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def html_url(self, web_base_url: str = "https://github.com") -> str:
        return f"{web_base_url.rstrip('/')}/{self.owner}/{self.name}"

    def api_path(self, *segments) -> str:
        """Path under ``repos/{owner}/{repo}``, each segment escaped."""
        return path_for("repos", self.owner, self.name, *segments)


def parse_repository_uri(uri: str) -> RepositoryRef:
    """Parse a web, API or SSH URL that points at a repository.

    >>> parse_repository_uri("https://github.com/octo/hello.git")
    RepositoryRef(owner='octo', name='hello')
    """
    uri = (uri or "").strip()
    m = _SSH_RE.match(uri)
    if m:
        return RepositoryRef(m.group("owner"), m.group("repo"))

    parsed = urlparse(uri)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgument(f"Not a repository URL: {uri!r}")
    parts = [p for p in parsed.path.split("/") if p]
    # API URLs look like https://api.github.com/repos/{owner}/{repo}/...
    # or https://ghe.example.com/api/v3/repos/{owner}/{repo}/... on Enterprise
    if parts[:2] == ["api", "v3"]:
        parts = parts[2:]
    if parts and parts[0] == "repos":
        parts = parts[1:]
    if len(parts) < 2:
        raise InvalidArgument(f"Repository URL is missing owner or name: {uri!r}")
    name = parts[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise InvalidArgument(f"Repository URL is missing owner or name: {uri!r}")
    return RepositoryRef(parts[0], name)


def resolve_repository(
    owner: str | None = None,
    repo: str | None = None,
    uri: str | None = None,
    settings: Settings | None = None,
) -> RepositoryRef:
    """Pick the repository from exactly one input mode.

    The modes are an explicit ``owner``/``repo`` pair, a ``uri``, or the
    configured default owner and repo. ``repo`` may also be "owner/name".
    """
    if uri and (owner or repo):
        raise InvalidArgument("Specify either uri or owner/repo, not both")
    if uri:
        return parse_repository_uri(uri)

    if repo and "/" in repo and not owner:
        owner, _, repo = repo.partition("/")

    if not owner or not repo:
        settings = settings or get_settings()
        owner = owner or settings.github_default_owner
        repo = repo or settings.github_default_repo
    if not owner or not repo:
        raise InvalidArgument(
            "Unable to determine the repository: pass owner and repo, a uri, "
            "or set GITHUB_DEFAULT_OWNER and GITHUB_DEFAULT_REPO"
        )
    return RepositoryRef(owner, repo)
