"""Claude (Anthropic) LLM Client"""

from typing import Any

import anthropic

from git_ai_commit.llm.base import LLMClient, ModelError, resolve_api_key
from git_ai_commit.prompts import Prompt


class ClaudeClient(LLMClient):
    """Messages API client. Key from ANTHROPIC_API_KEY unless passed in."""

    API_KEY_ENV = "ANTHROPIC_API_KEY"
    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.4

    def __init__(self, api_key: str | None = None, model: str | None = None, client: Any = None):
        self.model = model or self.DEFAULT_MODEL
        if client is None:
            client = anthropic.Anthropic(api_key=resolve_api_key(api_key, self.API_KEY_ENV))
        self._client = client

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: Prompt) -> str:
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=prompt.system_instruction,
                messages=[{"role": "user", "content": prompt.user_content}],
            )
        except anthropic.AuthenticationError:
            raise ModelError(f"Invalid API key. Check your {self.API_KEY_ENV}.")
        except anthropic.RateLimitError:
            raise ModelError("Claude rate limit reached. Try again later.")
        except anthropic.APIError as e:
            raise ModelError(f"Claude API error: {e.message}")

        text_blocks = [b for b in getattr(response, "content", None) or [] if getattr(b, "type", None) == "text"]
        content = text_blocks[0].text.strip() if text_blocks else ""
        if not content:
            raise ModelError("Claude returned no output")
        return content
