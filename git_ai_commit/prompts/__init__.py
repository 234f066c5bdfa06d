"""Prompt Construction Package"""

from git_ai_commit.prompts.builder import Prompt, PromptBuilder, PromptConfig

__all__ = ["Prompt", "PromptBuilder", "PromptConfig"]
