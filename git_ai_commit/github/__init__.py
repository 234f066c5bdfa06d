"""GitHub Integration Package"""

from git_ai_commit.github.client import GitHubClient, GitHubError, PullRequest
from git_ai_commit.github.remote import RepoIdentity, branch_url, parse_remote_url

__all__ = [
    "GitHubClient",
    "GitHubError",
    "PullRequest",
    "RepoIdentity",
    "branch_url",
    "parse_remote_url",
]
