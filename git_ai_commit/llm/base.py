"""LLM Base Classes and Shared Code"""

import os
from abc import ABC, abstractmethod

from git_ai_commit.prompts import Prompt


class ModelError(Exception):
    """Raised when the model can't produce output (network, quota, auth, empty reply)."""
    pass


def resolve_api_key(api_key: str | None, env_var: str) -> str:
    """Explicit key, else the environment; ModelError with setup help if neither."""
    key = api_key or os.environ.get(env_var)
    if not key:
        raise ModelError(
            f"No API key found. Set {env_var} environment variable:\n"
            f"  export {env_var}='your-key-here'"
        )
    return key


class LLMClient(ABC):
    """Abstract base for LLM clients.

    `generate` returns the raw text of the reply and does not retry; the
    commit generator owns the retry policy.
    """

    @abstractmethod
    def generate(self, prompt: Prompt) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
