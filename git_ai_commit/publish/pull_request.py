"""Pull request reconciliation: update the open PR for a branch, or open one.

This is a list-then-act sequence with no lock on the remote. Two runs racing
on the same branch can both see "no PR" and open two, or interleave body
updates. That window is accepted.
"""

from dataclasses import dataclass
from typing import Optional

from git_ai_commit.commit import CommitRecord
from git_ai_commit.github import GitHubClient, GitHubError, RepoIdentity, branch_url
from git_ai_commit.logging import get_logger

logger = get_logger("pull_request")

PR_BODY_TEMPLATE = "## Summary\n\n### Changes\n{body}"

NO_COMMITS_MARKER = "no commits between"

CREATED = "created"
UPDATED = "updated"
NO_CHANGES = "no-changes"


@dataclass(frozen=True)
class PullRequestTarget:
    owner: str
    repo: str
    head: str
    base: str = "main"

    @property
    def identity(self) -> RepoIdentity:
        return RepoIdentity(owner=self.owner, repo=self.repo)

    @property
    def head_filter(self) -> str:
        return f"{self.owner}:{self.head}"


@dataclass(frozen=True)
class PullRequestOutcome:
    action: str
    url: str
    number: Optional[int] = None
    message: str = ""


def append_body(existing: str, addition: str) -> str:
    """New changes go beneath what the PR already says."""
    if not existing.strip():
        return addition
    if not addition:
        return existing
    return existing.rstrip("\n") + "\n" + addition


def _is_no_commits_error(error: GitHubError) -> bool:
    return error.status_code == 422 and NO_COMMITS_MARKER in error.details.lower()


def reconcile_pull_request(client: GitHubClient, target: PullRequestTarget, record: CommitRecord) -> PullRequestOutcome:
    """Append to the first open PR for `target.head`, or create one.

    Raises GitHubError for anything except the "no commits between" rejection,
    which is reported as a NO_CHANGES outcome.
    """
    existing = client.list_pull_requests(target.owner, target.repo, head=target.head_filter)

    if existing:
        canonical = existing[0]
        if len(existing) > 1:
            logger.warning("%d open PRs for %s, updating #%d", len(existing), target.head, canonical.number)
        updated = client.update_pull_request(
            target.owner,
            target.repo,
            canonical.number,
            body=append_body(canonical.body, record.body_text),
        )
        logger.info("Updated PR #%d", updated.number)
        return PullRequestOutcome(
            action=UPDATED,
            url=updated.html_url or canonical.html_url,
            number=updated.number,
            message=f"Updated pull request #{updated.number}",
        )

    try:
        created = client.create_pull_request(
            target.owner,
            target.repo,
            title=record.title,
            body=PR_BODY_TEMPLATE.format(body=record.body_text),
            head=target.head,
            base=target.base,
        )
    except GitHubError as e:
        if not _is_no_commits_error(e):
            raise
        logger.info("No commits between %s and %s, skipping PR", target.base, target.head)
        return PullRequestOutcome(
            action=NO_CHANGES,
            url=branch_url(target.identity, target.head),
            message=f"No commits between {target.base} and {target.head}; nothing to open a pull request for",
        )

    logger.info("Created PR #%d", created.number)
    return PullRequestOutcome(
        action=CREATED,
        url=created.html_url,
        number=created.number,
        message=f"Opened pull request #{created.number}",
    )
