"""Thin per-resource callers over the shared REST client."""

from .branches import get_branch, get_branch_protection, list_branches, new_branch, remove_branch
from .comments import get_comment, list_comments, new_comment, remove_comment, update_comment
from .contents import get_content, set_content
from .gists import get_gist, is_gist_starred, list_gists, new_gist, remove_gist, star_gist, unstar_gist
from .issues import get_issue, list_issues, lock_issue, new_issue, unlock_issue, update_issue
from .labels import (
    add_issue_labels,
    get_label,
    list_labels,
    new_label,
    remove_issue_label,
    remove_label,
    update_label,
)
from .projects import get_project, list_projects, new_project, remove_project
from .rate_limit import get_rate_limit
from .reactions import add_reaction, list_reactions, remove_reaction
from .references import get_reference, list_references, new_reference, remove_reference, update_reference
from .secrets import get_secret_public_key, list_secrets, remove_secret, set_secret
from .teams import get_team, list_team_members, list_teams
from .traffic import get_clone_traffic, get_path_traffic, get_referrer_traffic, get_view_traffic

__all__ = [
    "add_issue_labels",
    "add_reaction",
    "get_branch",
    "get_branch_protection",
    "get_clone_traffic",
    "get_comment",
    "get_content",
    "get_gist",
    "get_issue",
    "get_label",
    "get_path_traffic",
    "get_project",
    "get_rate_limit",
    "get_reference",
    "get_referrer_traffic",
    "get_secret_public_key",
    "get_team",
    "get_view_traffic",
    "is_gist_starred",
    "list_branches",
    "list_comments",
    "list_gists",
    "list_issues",
    "list_labels",
    "list_projects",
    "list_reactions",
    "list_references",
    "list_secrets",
    "list_team_members",
    "list_teams",
    "lock_issue",
    "new_branch",
    "new_comment",
    "new_gist",
    "new_issue",
    "new_label",
    "new_project",
    "new_reference",
    "remove_branch",
    "remove_comment",
    "remove_gist",
    "remove_issue_label",
    "remove_label",
    "remove_project",
    "remove_reaction",
    "remove_reference",
    "remove_secret",
    "set_content",
    "set_secret",
    "star_gist",
    "unlock_issue",
    "unstar_gist",
    "update_comment",
    "update_issue",
    "update_label",
    "update_reference",
]
