"""Changelog Document - Format entries and prepend them to CHANGELOG.md."""

from datetime import date
from pathlib import Path

from aichangelog.changelog.version import SemVer

ENTRY_SEPARATOR = "\n\n"


def format_entry(version: SemVer, release_date: date, summary: str) -> str:
    """Build '## vX.Y.Z (YYYY-MM-DD)', a blank line, then the summary verbatim."""
    return f"## {version.to_tag()} ({release_date.isoformat()})\n\n{summary}"


def prepend_entry(entry: str, existing: str) -> str:
    """New entry first, old content untouched after it."""
    return entry + ENTRY_SEPARATOR + existing


class ChangelogFile:
    """A changelog on disk. Missing files read as empty."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> str:
        if not self.path.exists():
            return ""
        # newline='' on both sides keeps older entries byte-for-byte
        with open(self.path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def write(self, content: str) -> None:
        with open(self.path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)

    def prepend(self, entry: str) -> str:
        """Rewrite the whole file with the entry at the head. Returns the new content."""
        updated = prepend_entry(entry, self.read())
        self.write(updated)
        return updated
