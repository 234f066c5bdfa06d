"""Terminal Output Formatting Package"""

import os
import re
import sys
import threading

from git_ai_commit import COMMIT_TYPES


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'


def _supports_color(stream) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty()) and sys.platform != 'win32'


def _supports_unicode(stream) -> bool:
    try:
        '✓⚠→'.encode(getattr(stream, 'encoding', None) or 'utf-8')
        return True
    except (UnicodeEncodeError, LookupError):
        return False


COLORS_ENABLED = _supports_color(sys.stdout)
UNICODE_ENABLED = _supports_unicode(sys.stdout)

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
ARROW = '→' if UNICODE_ENABLED else '->'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
RULE = '─' if UNICODE_ENABLED else '-'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def _style(*codes: str):
    def apply(text: str) -> str:
        return _colorize(text, *codes)
    return apply


success = _style(Colors.GREEN)
error = _style(Colors.RED)
warning = _style(Colors.YELLOW)
info = _style(Colors.CYAN)
dim = _style(Colors.DIM)
bold = _style(Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str, detail: str | None = None) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)
    if detail:
        print(dim(f"  {detail}"), file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


# Types not listed here are shown in cyan
COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'perf': Colors.GREEN,
    'fix': Colors.RED,
    'revert': Colors.RED,
    'refactor': Colors.YELLOW,
    'chore': Colors.DIM,
    'style': Colors.DIM,
}

_TITLE_PREFIX = re.compile(r'^([a-z]+)!?(\([^)]*\))?!?:')


def format_title(title: str) -> str:
    """Bold title with its conventional-commit prefix colored by type."""
    match = _TITLE_PREFIX.match(title)
    if not COLORS_ENABLED or not match or match.group(1) not in COMMIT_TYPES:
        return bold(title)
    color = COMMIT_TYPE_COLORS.get(match.group(1), Colors.CYAN)
    prefix = match.group(0)
    return _colorize(prefix, Colors.BOLD, color) + bold(title[len(prefix):])


def render_record(title: str, body_lines) -> list[str]:
    """Lines showing a commit title and its bullets between two rules."""
    width = max((len(line) for line in [title, *body_lines]), default=40)
    rule = dim(RULE * min(width, 72))
    lines = [rule, format_title(title)]
    if body_lines:
        lines.append('')
        for line in body_lines:
            lines.append(dim('-') + line[1:] if line.startswith('-') else line)
    lines.append(rule)
    return lines


class Spinner:
    """Animated spinner with a label, drawn on stderr while a step runs.

    Without a terminal the label is printed once and nothing animates.
    """
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self, label: str = "", stream=None):
        self.label = label
        self.stream = stream or sys.stderr
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII
        self._active = False

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            self.stream.write(f'\r\033[K{frame} {self.label}')
            self.stream.flush()
            idx += 1
            self._stop_event.wait(0.08)

    def __enter__(self):
        isatty = getattr(self.stream, 'isatty', None)
        self._active = bool(isatty and isatty())
        if self._active:
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        elif self.label:
            print(self.label, file=self.stream)
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
        if self._active:
            self.stream.write('\r\033[K')
            self.stream.flush()


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "ARROW", "WARN",
    "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error", "print_warning",
    "format_title", "render_record", "Spinner", "COMMIT_TYPE_COLORS",
]
