"""Commit Message Generation Package"""

from git_ai_commit.commit.record import CommitRecord
from git_ai_commit.commit.parser import ResponseParser, normalize_response, check_title
from git_ai_commit.commit.generator import CommitGenerator

__all__ = [
    "CommitRecord",
    "ResponseParser",
    "CommitGenerator",
    "normalize_response",
    "check_title",
]
