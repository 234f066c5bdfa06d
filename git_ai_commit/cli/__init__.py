"""Command Line Interface Package"""

from git_ai_commit.cli.main import main

__all__ = ["main"]
