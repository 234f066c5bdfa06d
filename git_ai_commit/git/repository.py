"""Git Repository - Thin wrapper over the git executable."""

import subprocess
from pathlib import Path
from typing import Callable, Sequence

from git_ai_commit.logging import get_logger

logger = get_logger("git")

Runner = Callable[..., str]


class GitError(Exception):
    """Raised when a git command fails."""
    pass


class RepositoryStateError(GitError):
    """Raised when the working directory can't be used as a repository."""
    pass


class GitRepository:
    """Reads from and writes to the repository at `path`.

    Every command goes through `runner(args, cwd=...)`, which returns stdout
    and raises GitError on failure. Tests pass a fake runner.
    """

    def __init__(self, path: str | Path = ".", runner: Runner | None = None):
        self.path = Path(path)
        self._runner = runner or self._default_runner

    def _run_git(self, *args: str) -> str:
        logger.debug("git %s", " ".join(args))
        return self._runner(['git', *args], cwd=self.path)

    @staticmethod
    def _default_runner(args: Sequence[str], *, cwd: Path) -> str:
        try:
            result = subprocess.run(
                list(args),
                cwd=str(cwd),
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            raise GitError(f"Git command failed: {' '.join(args)}\n{detail}")
        except FileNotFoundError:
            raise RepositoryStateError("Git is not installed or not in PATH")

    def status(self) -> str:
        """Porcelain status. Fails outside a repository."""
        try:
            return self._run_git('status', '--porcelain')
        except RepositoryStateError:
            raise
        except GitError as e:
            raise RepositoryStateError(f"Not inside a git repository: {self.path}") from e

    def current_branch(self) -> str:
        try:
            branch = self._run_git('rev-parse', '--abbrev-ref', 'HEAD').strip()
        except RepositoryStateError:
            raise
        except GitError as e:
            raise RepositoryStateError("Repository has no HEAD. Make an initial commit first.") from e
        if not branch:
            raise RepositoryStateError("Could not determine the current branch")
        return branch

    def diff(self, staged: bool = True, names_only: bool = False) -> str:
        args = ['diff']
        if staged:
            args.append('--cached')
        if names_only:
            args.append('--name-only')
        return self._run_git(*args)

    def staged_files(self) -> list[str]:
        output = self.diff(staged=True, names_only=True)
        return [line.strip() for line in output.split('\n') if line.strip()]

    def commit(self, message: str) -> str:
        return self._run_git('commit', '-m', message)

    def push(self, remote: str = "origin", branch: str | None = None) -> str:
        branch = branch or self.current_branch()
        return self._run_git('push', '-u', remote, branch)

    def remote_url(self, name: str = "origin") -> str:
        return self._run_git('remote', 'get-url', name).strip()
