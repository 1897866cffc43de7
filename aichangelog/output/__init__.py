"""Terminal Output Formatting Package

stdout carries the changelog entry and progress, stderr carries warnings and
errors. Each stream decides for itself whether it gets ANSI colors, so piping
the entry somewhere does not strip color from errors on the terminal.
"""

import itertools
import os
import re
import sys
import threading

STYLES = {
    'reset': '\033[0m',
    'bold': '\033[1m',
    'dim': '\033[2m',
    'red': '\033[31m',
    'green': '\033[32m',
    'yellow': '\033[33m',
    'cyan': '\033[36m',
}


def color_enabled(stream=None) -> bool:
    """NO_COLOR beats FORCE_COLOR; otherwise color only on a terminal."""
    stream = stream or sys.stdout
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def _unicode_enabled() -> bool:
    try:
        '✓✗⚠─'.encode(getattr(sys.stdout, 'encoding', None) or 'utf-8')
    except (UnicodeEncodeError, LookupError):
        return False
    return True


UNICODE_ENABLED = _unicode_enabled()
CHECK, CROSS, WARN, RULE = ('✓', '✗', '⚠', '─') if UNICODE_ENABLED else ('[OK]', '[X]', '[!]', '-')


def style(text: str, *names: str, stream=None) -> str:
    if not color_enabled(stream):
        return text
    return ''.join(STYLES[name] for name in names) + text + STYLES['reset']


def bold(text: str) -> str:
    return style(text, 'bold')


def dim(text: str) -> str:
    return style(text, 'dim')


def info(text: str) -> str:
    return style(text, 'cyan')


def print_success(message: str) -> None:
    print(f"{style(CHECK, 'green')} {message}")


def print_error(message: str) -> None:
    print(style(f"{CROSS} {message}", 'red', stream=sys.stderr), file=sys.stderr)


def print_warning(message: str) -> None:
    print(style(f"{WARN} {message}", 'yellow', stream=sys.stderr), file=sys.stderr)


def print_hint(message: str) -> None:
    """Indented follow-up line under an error."""
    print(style(f"  {message}", 'dim', stream=sys.stderr), file=sys.stderr)


HEADING_RE = re.compile(r'^(##|###) .*$', re.MULTILINE)
HEADING_STYLES = {'##': ('bold', 'cyan'), '###': ('bold', 'green')}


def colorize_markdown(text: str) -> str:
    """Color the '## version' and '### Section' headings of a changelog entry."""
    if not color_enabled():
        return text
    return HEADING_RE.sub(lambda m: style(m.group(0), *HEADING_STYLES[m.group(1)]), text)


class Spinner:
    """Animates `label` on a terminal while the with-block runs. Silent when piped."""

    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏' if UNICODE_ENABLED else '-\\|/'
    INTERVAL = 0.08

    def __init__(self, label: str = "", stream=None):
        self.label = label
        self.stream = stream or sys.stdout
        self._done = threading.Event()
        self._worker = None

    def _draw(self, text: str) -> None:
        self.stream.write(f'\r\033[K{text}')
        self.stream.flush()

    def _run(self) -> None:
        for frame in itertools.cycle(self.FRAMES):
            self._draw(f"{frame} {self.label}")
            if self._done.wait(self.INTERVAL):
                break

    def __enter__(self):
        if self.stream.isatty():
            self._worker = threading.Thread(target=self._run, daemon=True)
            self._worker.start()
        return self

    def __exit__(self, *exc_info):
        self._done.set()
        if self._worker:
            self._worker.join()
            self._draw('')
        return False


__all__ = [
    "STYLES", "UNICODE_ENABLED", "CHECK", "CROSS", "WARN", "RULE",
    "color_enabled", "style", "bold", "dim", "info",
    "print_success", "print_error", "print_warning", "print_hint",
    "colorize_markdown", "Spinner",
]
