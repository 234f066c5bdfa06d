"""Prompt Builder - Construct LLM prompts for commit and PR text."""

from dataclasses import dataclass

from git_ai_commit import COMMIT_SCOPES, COMMIT_TYPES
from git_ai_commit.git import DiffSnapshot


@dataclass(frozen=True)
class Prompt:
    """What gets sent to the model: a fixed system part and the per-diff part."""
    system_instruction: str
    user_content: str


@dataclass
class PromptConfig:
    """User-provided context that shapes the prompt."""
    hint: str | None = None
    max_subject_length: int = 72


class PromptBuilder:
    """Composes prompts that ask for a JSON {title, body} object."""

    def __init__(self, config: PromptConfig | None = None):
        self.config = config or PromptConfig()

    def compose(self, snapshot: DiffSnapshot) -> Prompt:
        sections = [
            self._build_branch_section(snapshot),
            self._build_files_section(snapshot),
            self._build_diff_section(snapshot),
            self._build_hints_section(),
            self._build_final_instructions(snapshot),
        ]
        return Prompt(
            system_instruction=self.build_system_instruction(),
            user_content="\n\n".join(filter(None, sections)),
        )

    def build_system_instruction(self) -> str:
        max_len = self.config.max_subject_length
        types_list = "\n".join(f"  - {t}: {desc}" for t, desc in COMMIT_TYPES.items())
        scopes = ", ".join(COMMIT_SCOPES)

        return f"""You are an expert at writing git commit messages and pull request summaries.

Respond with ONLY a raw JSON object. No markdown, no code fences, no explanation before or after it.

The object has exactly two fields:
{{"title": "<string>", "body": ["- <string>", "- <string>"]}}

title:
- Conventional commit format: type(scope): message
- The scope is optional; when present it must be one of: {scopes}
- Lowercase, imperative mood, at most {max_len} characters
- Choose the most appropriate type:
{types_list}

body:
- An array of strings, one entry per change
- Every entry starts with "- "
- Describe WHAT changed and WHY, naming files, components or functions
- Use an empty array when there is nothing to list"""

    def _build_branch_section(self, snapshot: DiffSnapshot) -> str:
        return f'<branch>\nUse the branch "{snapshot.branch}" as context for the type and scope.\n</branch>'

    def _build_files_section(self, snapshot: DiffSnapshot) -> str:
        if snapshot.is_empty:
            return ""
        files = "\n".join(f"  {path}" for path in snapshot.staged_files)
        return f"<files>\nSTAGED FILES: {snapshot.total_files}\n{files}\n</files>"

    def _build_diff_section(self, snapshot: DiffSnapshot) -> str:
        if not snapshot.diff_text.strip():
            return "<changes>\n(the staged diff is empty)\n</changes>"
        return f"<changes>\n{snapshot.diff_text}\n</changes>"

    def _build_hints_section(self) -> str:
        if not self.config.hint:
            return ""

        return f"""<context>
The developer provided this context about the changes:
"{self.config.hint}"

Use this to inform your message, but verify it matches what you see in the diff.
</context>"""

    def _build_final_instructions(self, snapshot: DiffSnapshot) -> str:
        if not snapshot.diff_text.strip():
            body_rule = "- There is no diff to describe: still return a meaningful title, and an empty body array"
        else:
            body_rule = '- Fill the body array with one "- " entry per change found in the diff'

        return f"""<instructions>
Generate exactly ONE JSON object.

Rules:
- Start directly with {{ and end with }}
- No markdown formatting (no ```, no bold)
- No preamble like "Here's a commit message:"
{body_rule}
</instructions>"""
