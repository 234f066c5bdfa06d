"""Git Operations Package"""

from git_ai_commit.git.repository import GitRepository, GitError, RepositoryStateError
from git_ai_commit.git.collector import DiffCollector, DiffSnapshot

__all__ = [
    "GitRepository",
    "GitError",
    "RepositoryStateError",
    "DiffCollector",
    "DiffSnapshot",
]
