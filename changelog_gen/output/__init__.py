"""Terminal and CI Output Package"""

import os
import sys
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, TextIO


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    CYAN = '\033[36m'


def _in_github_actions() -> bool:
    return os.environ.get('GITHUB_ACTIONS') == 'true'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR') or _in_github_actions():
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    return sys.platform != 'win32' or 'WT_SESSION' in os.environ


def _supports_unicode() -> bool:
    try:
        '✓'.encode(sys.stdout.encoding or 'utf-8')
        return True
    except (UnicodeEncodeError, LookupError):
        return False


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CROSS = '✗' if UNICODE_ENABLED else '[X]'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def ref(text: str) -> str:
    """Colour used for refs, tags and repository names."""
    return _colorize(text, Colors.BLUE)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_error(message: str) -> None:
    if _in_github_actions():
        print(f"::error::{message}", file=sys.stderr)
        return
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    if _in_github_actions():
        print(f"::warning::{message}", file=sys.stderr)
        return
    print(f"{warning('⚠')} {warning(message)}" if UNICODE_ENABLED else f"[!] {message}", file=sys.stderr)


@contextmanager
def group(title: str):
    """Collapsible log group in GitHub Actions, a bold heading elsewhere."""
    if _in_github_actions():
        print(f"::group::{title}", file=sys.stderr)
        try:
            yield
        finally:
            print("::endgroup::", file=sys.stderr)
    else:
        print(bold(title), file=sys.stderr)
        yield


class OutputWriter:
    """Emits key/value results.

    With a path (normally ``$GITHUB_OUTPUT``) values are appended in the
    Actions file format, using a heredoc delimiter for multi-line values.
    Without one, ``key=value`` pairs are printed to the given stream.
    """

    def __init__(self, path: Optional[str] = None, stream: Optional[TextIO] = None):
        self.path = Path(path) if path else None
        self.stream = stream
        self.values: dict[str, str] = {}

    @classmethod
    def from_env(cls, path: Optional[str] = None) -> 'OutputWriter':
        return cls(path or os.environ.get('GITHUB_OUTPUT'))

    @staticmethod
    def _format(key: str, value: str) -> str:
        if '\n' not in value:
            return f"{key}={value}\n"
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"

    def set(self, key: str, value) -> None:
        value = '' if value is None else str(value)
        self.values[key] = value
        record = self._format(key, value)
        if self.path is not None:
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(record)
        else:
            (self.stream or sys.stdout).write(record)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CROSS",
    "error", "warning", "info", "ref", "dim", "bold",
    "print_error", "print_warning",
    "group", "OutputWriter",
]
