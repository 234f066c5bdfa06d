"""Commit Generator - Diff -> prompt -> model -> CommitRecord, with bounded retries."""

from typing import Sequence

from git_ai_commit.commit.parser import ResponseParser
from git_ai_commit.commit.record import CommitRecord
from git_ai_commit.git import DiffCollector
from git_ai_commit.llm import LLMClient, ModelError
from git_ai_commit.logging import get_logger
from git_ai_commit.prompts import PromptBuilder

logger = get_logger("generator")


class CommitGenerator:
    """Drives one commit-message generation.

    Two nested fixed-count loops: up to REQUEST_ATTEMPTS model calls to get
    any output, and up to PARSE_ATTEMPTS rounds of (request, parse). Worst
    case is REQUEST_ATTEMPTS * PARSE_ATTEMPTS model calls.
    """

    REQUEST_ATTEMPTS = 2
    PARSE_ATTEMPTS = 2

    def __init__(
        self,
        collector: DiffCollector,
        client: LLMClient,
        builder: PromptBuilder | None = None,
        parser: ResponseParser | None = None,
    ):
        self.collector = collector
        self.client = client
        self.builder = builder or PromptBuilder()
        self.parser = parser or ResponseParser(self.builder.config.max_subject_length)
        self.model_calls = 0

    def generate(self, files: Sequence[str]) -> CommitRecord | None:
        self.model_calls = 0
        if not files:
            logger.info("No staged files, nothing to generate")
            return None

        for round_num in range(1, self.PARSE_ATTEMPTS + 1):
            raw = self._request()
            if raw is None:
                return None

            record = self.parser.parse(raw)
            if record is not None:
                logger.debug("Parsed commit record on round %d: %s", round_num, record.title)
                return record
            logger.warning("Could not parse model response (round %d/%d)", round_num, self.PARSE_ATTEMPTS)

        return None

    def _request(self) -> str | None:
        """Fresh snapshot and prompt, then up to REQUEST_ATTEMPTS model calls."""
        snapshot = self.collector.collect()
        prompt = self.builder.compose(snapshot)

        for attempt in range(1, self.REQUEST_ATTEMPTS + 1):
            self.model_calls += 1
            try:
                raw = self.client.generate(prompt)
            except ModelError as e:
                logger.warning("Model call failed (attempt %d/%d): %s", attempt, self.REQUEST_ATTEMPTS, e)
                continue
            if raw and raw.strip():
                return raw
            logger.warning("Model returned no output (attempt %d/%d)", attempt, self.REQUEST_ATTEMPTS)

        return None
