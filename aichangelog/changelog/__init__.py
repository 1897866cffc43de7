"""Changelog Versioning and Document Package"""

from aichangelog.changelog.version import (
    SemVer, ReleaseTrigger, VersionError, next_version, DEFAULT_TRIGGER_ENV,
)
from aichangelog.changelog.document import ChangelogFile, format_entry, prepend_entry

__all__ = [
    "SemVer",
    "ReleaseTrigger",
    "VersionError",
    "next_version",
    "DEFAULT_TRIGGER_ENV",
    "ChangelogFile",
    "format_entry",
    "prepend_entry",
]
