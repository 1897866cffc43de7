"""Git Operations Package"""

from aichangelog.git.analyzer import GitAnalyzer, GitError, FileChange, ReleaseChanges, parse_numstat

__all__ = [
    "GitAnalyzer",
    "GitError",
    "FileChange",
    "ReleaseChanges",
    "parse_numstat",
]
