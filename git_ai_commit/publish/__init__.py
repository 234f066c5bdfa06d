"""Commit/Push/Pull Request Publishing Package"""

from git_ai_commit.publish.pull_request import (
    CREATED,
    NO_CHANGES,
    PR_BODY_TEMPLATE,
    UPDATED,
    PullRequestOutcome,
    PullRequestTarget,
    append_body,
    reconcile_pull_request,
)
from git_ai_commit.publish.publisher import PublishError, PublishResult, PublishState, Publisher

__all__ = [
    "CREATED",
    "NO_CHANGES",
    "PR_BODY_TEMPLATE",
    "UPDATED",
    "PullRequestOutcome",
    "PullRequestTarget",
    "append_body",
    "reconcile_pull_request",
    "PublishError",
    "PublishResult",
    "PublishState",
    "Publisher",
]
