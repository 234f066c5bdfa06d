"""Gemini (Google) LLM Client"""

from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from git_ai_commit.llm.base import LLMClient, ModelError, resolve_api_key
from git_ai_commit.prompts import Prompt


def extract_first_candidate_text(response: Any) -> str:
    """Text of the first part of the first candidate, or "" if any step is missing."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return ""
    text = getattr(parts[0], "text", None)
    return text if isinstance(text, str) else ""


class GeminiClient(LLMClient):
    """Gemini client on google-genai. Key from GEMINI_API_KEY unless passed in."""

    API_KEY_ENV = "GEMINI_API_KEY"
    DEFAULT_MODEL = "gemini-1.5-flash"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.4

    def __init__(self, api_key: str | None = None, model: str | None = None, client: Any = None):
        self.model = model or self.DEFAULT_MODEL
        if client is None:
            client = genai.Client(api_key=resolve_api_key(api_key, self.API_KEY_ENV))
        self._client = client

    @property
    def name(self) -> str:
        return f"Gemini ({self.model})"

    def generate(self, prompt: Prompt) -> str:
        config = types.GenerateContentConfig(
            system_instruction=prompt.system_instruction,
            temperature=self.TEMPERATURE,
            max_output_tokens=self.MAX_TOKENS,
        )
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=prompt.user_content,
                config=config,
            )
        except errors.ClientError as e:
            if e.code in (401, 403):
                raise ModelError(f"Invalid API key. Check your {self.API_KEY_ENV}.")
            if e.code == 429:
                raise ModelError("Gemini quota exceeded. Try again later.")
            raise ModelError(f"Gemini API error ({e.code}): {e.message}")
        except errors.APIError as e:
            raise ModelError(f"Gemini API error ({e.code}): {e.message}")
        except (httpx.HTTPError, OSError) as e:
            raise ModelError(f"Connection to Gemini failed: {e}")

        content = extract_first_candidate_text(response).strip()
        if not content:
            raise ModelError("Gemini returned no output")
        return content
