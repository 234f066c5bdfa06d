"""Diff Collector - Capture what's staged for the next commit."""

from dataclasses import dataclass

from git_ai_commit.git.repository import GitError, GitRepository, RepositoryStateError


@dataclass(frozen=True)
class DiffSnapshot:
    """Branch, staged paths and staged diff, read together."""
    branch: str
    staged_files: tuple[str, ...] = ()
    diff_text: str = ""

    @property
    def total_files(self) -> int:
        return len(self.staged_files)

    @property
    def is_empty(self) -> bool:
        return not self.staged_files


class DiffCollector:
    """Reads a DiffSnapshot from a repository. Never writes."""

    def __init__(self, repository: GitRepository):
        self.repository = repository

    def collect(self) -> DiffSnapshot:
        # Fail fast before anything else if git can't report status
        self.repository.status()
        try:
            branch = self.repository.current_branch()
            files = self.repository.staged_files()
            diff_text = self.repository.diff(staged=True)
        except RepositoryStateError:
            raise
        except GitError as e:
            raise RepositoryStateError(str(e)) from e
        return DiffSnapshot(branch=branch, staged_files=tuple(files), diff_text=diff_text)
