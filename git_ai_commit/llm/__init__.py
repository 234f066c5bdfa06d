"""LLM Client Package"""

from git_ai_commit.llm.base import LLMClient, ModelError
from git_ai_commit.llm.claude import ClaudeClient
from git_ai_commit.llm.gemini import GeminiClient, extract_first_candidate_text

PROVIDERS = {
    "gemini": GeminiClient,
    "claude": ClaudeClient,
}

AUTO_DETECT_ORDER = [GeminiClient, ClaudeClient]


def get_client(provider: str = "auto", model: str | None = None) -> LLMClient:
    """Get an LLM client. Provider can be 'gemini', 'claude', or 'auto'."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](model=model)

    if provider == "auto":
        for client_class in AUTO_DETECT_ORDER:
            try:
                return client_class(model=model)
            except ModelError:
                continue

        raise ModelError(
            "No LLM provider available.\n\n"
            "Option 1 - Use Gemini:\n"
            "  export GEMINI_API_KEY='your-key-here'\n\n"
            "Option 2 - Use Claude API:\n"
            "  export ANTHROPIC_API_KEY='your-key-here'"
        )

    raise ModelError(f"Unknown provider: {provider}. Use 'gemini', 'claude', or 'auto'.")


__all__ = [
    "LLMClient",
    "ModelError",
    "GeminiClient",
    "ClaudeClient",
    "get_client",
    "extract_first_candidate_text",
    "PROVIDERS",
]
