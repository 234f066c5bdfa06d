"""Publisher - Commit, push and optionally reconcile a pull request."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from git_ai_commit.commit import CommitGenerator, CommitRecord
from git_ai_commit.git import GitError, GitRepository, RepositoryStateError
from git_ai_commit.github import GitHubClient, GitHubError, parse_remote_url
from git_ai_commit.logging import get_logger
from git_ai_commit.publish.pull_request import PullRequestOutcome, PullRequestTarget, reconcile_pull_request

logger = get_logger("publisher")


class PublishState(Enum):
    GENERATING = "generating"
    COMMITTING = "committing"
    PUSHING = "pushing"
    RESOLVING_REPO_IDENTITY = "resolving-repo-identity"
    RECONCILING_PR = "reconciling-pr"
    DONE = "done"
    FAILED = "failed"


class PublishError(Exception):
    """A publish step failed. `stage` is one of STAGES."""

    STAGES = ("generation", "commit", "push", "repo-identity", "pr")

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.message = message


@dataclass
class PublishResult:
    state: PublishState
    record: Optional[CommitRecord] = None
    outcome: Optional[PullRequestOutcome] = None
    failure: Optional[PublishError] = None
    warning: Optional[PublishError] = None
    history: List[PublishState] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is PublishState.DONE


class Publisher:
    """Runs GENERATING -> COMMITTING -> PUSHING [-> RESOLVING_REPO_IDENTITY -> RECONCILING_PR] -> DONE.

    Only generation, commit and push failures end in FAILED. Once the push
    has gone through, PR problems are attached as `warning` and the result is
    still DONE; nothing already written is rolled back.
    """

    def __init__(
        self,
        repository: GitRepository,
        generator: CommitGenerator,
        github: GitHubClient | None = None,
        *,
        base_branch: str = "main",
        remote: str = "origin",
    ):
        self.repository = repository
        self.generator = generator
        self.github = github
        self.base_branch = base_branch
        self.remote = remote

    def publish(self, create_pr: bool = False) -> PublishResult:
        result = PublishResult(state=PublishState.GENERATING)
        self._enter(result, PublishState.GENERATING)

        files = self.repository.staged_files()
        if not files:
            raise RepositoryStateError("No staged changes. Run 'git add' first.")

        record = self.generator.generate(files)
        if record is None:
            return self._fail(result, PublishError(
                "generation",
                f"Could not generate a commit message after {self.generator.model_calls} model call(s)",
            ))
        result.record = record

        self._enter(result, PublishState.COMMITTING)
        try:
            self.repository.commit(record.title)
        except GitError as e:
            return self._fail(result, PublishError("commit", str(e)))

        self._enter(result, PublishState.PUSHING)
        try:
            branch = self.repository.current_branch()
            self.repository.push(self.remote, branch)
        except GitError as e:
            return self._fail(result, PublishError("push", str(e)))

        if create_pr:
            self._publish_pull_request(result, record, branch)

        self._enter(result, PublishState.DONE)
        return result

    def _publish_pull_request(self, result: PublishResult, record: CommitRecord, branch: str) -> None:
        self._enter(result, PublishState.RESOLVING_REPO_IDENTITY)
        try:
            url = self.repository.remote_url(self.remote)
        except GitError as e:
            result.warning = PublishError("repo-identity", str(e))
            return
        identity = parse_remote_url(url)
        if identity is None:
            result.warning = PublishError("repo-identity", f"Not a GitHub remote: {url}")
            return

        self._enter(result, PublishState.RECONCILING_PR)
        if self.github is None:
            result.warning = PublishError("pr", "No GitHub token. Set GH_ACCESS_TOKEN (or GITHUB_TOKEN).")
            return

        target = PullRequestTarget(owner=identity.owner, repo=identity.repo, head=branch, base=self.base_branch)
        logger.info("Reconciling pull request for %s on %s", branch, identity.full_name)
        try:
            result.outcome = reconcile_pull_request(self.github, target, record)
        except GitHubError as e:
            result.warning = PublishError("pr", e.details)

    def _enter(self, result: PublishResult, state: PublishState) -> None:
        logger.debug("publish state -> %s", state.value)
        result.state = state
        result.history.append(state)

    def _fail(self, result: PublishResult, error: PublishError) -> PublishResult:
        logger.warning("Publish failed at %s: %s", error.stage, error.message)
        result.failure = error
        self._enter(result, PublishState.FAILED)
        return result
