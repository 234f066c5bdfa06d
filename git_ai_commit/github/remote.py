"""Resolve a GitHub owner/repo pair from a git remote URL."""

import re
from dataclasses import dataclass
from typing import Optional

_REMOTE_PATTERNS = (
    re.compile(r'^https://github\.com/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?/?$'),
    re.compile(r'^git@github\.com:(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?$'),
)


@dataclass(frozen=True)
class RepoIdentity:
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_remote_url(url: str) -> Optional[RepoIdentity]:
    """Owner and repo from an https or ssh GitHub remote; None for anything else."""
    url = (url or "").strip()
    for pattern in _REMOTE_PATTERNS:
        match = pattern.match(url)
        if match and match.group("owner") and match.group("repo"):
            return RepoIdentity(owner=match.group("owner"), repo=match.group("repo"))
    return None


def branch_url(identity: RepoIdentity, branch: str) -> str:
    """Browsable URL of a branch on github.com."""
    return f"https://github.com/{identity.owner}/{identity.repo}/tree/{branch}"
