"""Response Parser - Turn untrusted model output into a CommitRecord."""

import json
import re

from git_ai_commit import COMMIT_TYPE_NAMES
from git_ai_commit.commit.record import CommitRecord
from git_ai_commit.logging import get_logger

logger = get_logger("parser")

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)

# Order matters: language-tagged fences before the bare marker
FENCE_MARKERS = ('```html', '```json', '```')


def normalize_response(raw: str) -> str:
    """Drop code fences and fold newlines so multi-line strings stay valid JSON."""
    text = raw or ""
    for marker in FENCE_MARKERS:
        text = text.replace(marker, '')
    text = text.replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')
    return text.strip()


def check_title(title: str, max_length: int = 72) -> tuple[bool, str]:
    """Soft check of a title against the conventional commit format."""
    pattern = rf'^({TYPES_PATTERN})!?(\([^)]+\))?!?: \S'
    if not re.match(pattern, title):
        return False, f"Missing conventional commit format. Got: {title[:50]}"
    if len(title) > max_length:
        return False, f"Title is {len(title)} chars, over the {max_length} limit"
    return True, ""


class ResponseParser:
    """Parses model replies. `parse` returns None instead of raising."""

    def __init__(self, max_subject_length: int = 72):
        self.max_subject_length = max_subject_length

    def parse(self, raw: str) -> CommitRecord | None:
        text = normalize_response(raw)
        if not text:
            logger.debug("Model response was empty after normalization")
            return None

        data = self._decode(text)
        if data is None:
            logger.debug("Model response is not JSON: %.80s", text)
            return None

        return self._to_record(data)

    def _decode(self, text: str):
        try:
            return json.loads(text)
        except (ValueError, RecursionError):
            pass

        # Tolerate chatter around the object, e.g. "Here you go: {...}"
        start, end = text.find('{'), text.rfind('}')
        if start == -1 or end <= start:
            return None
        try:
            return json.loads(text[start:end + 1])
        except (ValueError, RecursionError):
            return None

    def _to_record(self, data) -> CommitRecord | None:
        if not isinstance(data, dict):
            logger.debug("Model response is JSON but not an object")
            return None

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            logger.debug("Model response has no usable title")
            return None
        title = title.strip()

        body = self._to_body(data.get("body"))
        if body is None:
            logger.debug("Model response body has an unsupported shape")
            return None

        ok, reason = check_title(title, self.max_subject_length)
        if not ok:
            logger.debug("Accepting title anyway: %s", reason)

        return CommitRecord(title=title, body=tuple(body))

    @staticmethod
    def _to_body(value) -> list[str] | None:
        if value is None:
            return []
        if isinstance(value, str):
            return [value.strip()] if value.strip() else []
        if isinstance(value, list):
            items = []
            for item in value:
                if isinstance(item, (dict, list)) or item is None:
                    continue
                text = str(item).strip()
                if text:
                    items.append(text)
            return items
        return None
