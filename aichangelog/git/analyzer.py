"""Git Analyzer - Read the last release tag and everything committed since it."""

import subprocess
from dataclasses import dataclass, field


@dataclass
class FileChange:
    """Line counts for one path. Binary files count as zero."""
    path: str
    additions: int
    deletions: int

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions


@dataclass
class ReleaseChanges:
    """Everything that changed between the last tag and HEAD."""
    tag: str
    files: list[FileChange] = field(default_factory=list)
    diff: str = ""

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_additions(self) -> int:
        return sum(f.additions for f in self.files)

    @property
    def total_deletions(self) -> int:
        return sum(f.deletions for f in self.files)

    @property
    def is_empty(self) -> bool:
        return not self.diff


class GitError(Exception):
    """Raised when a git command fails or the repository is unusable."""
    pass


def _count(value: str) -> int:
    return 0 if value == '-' else int(value)


def parse_numstat(output: str) -> list[FileChange]:
    """Parse `git diff --numstat` lines of the form `<added>\\t<deleted>\\t<path>`."""
    files = []
    for line in output.splitlines():
        parts = line.split('\t', 2)
        if len(parts) != 3:
            continue
        added, deleted, path = parts
        files.append(FileChange(path=path, additions=_count(added), deletions=_count(deleted)))
    return files


class GitAnalyzer:
    """Reads release tags and diffs from the repository in the working directory."""

    PRECHECKS = (
        (('--version',), "Git is not installed or not in PATH"),
        (('rev-parse', '--git-dir'), "Not inside a git repository"),
    )

    def __init__(self):
        for args, message in self.PRECHECKS:
            try:
                self._run_git(*args)
            except GitError:
                raise GitError(message) from None

    def _run_git(self, *args: str) -> str:
        try:
            completed = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
            )
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")
        if completed.returncode != 0:
            raise GitError(f"git {' '.join(args)} failed: {completed.stderr.strip()}")
        return completed.stdout

    def get_last_tag(self) -> str:
        """Most recent tag reachable from HEAD."""
        try:
            tag = self._run_git('describe', '--tags', '--abbrev=0').strip()
        except GitError:
            tag = ""
        if not tag:
            raise GitError("No tags found in this repository")
        return tag

    def get_diff(self, tag: str) -> str:
        return self._run_git('diff', f'{tag}..HEAD')

    def get_changes_since(self, tag: str) -> ReleaseChanges:
        """Diff and per-file counts between the tag and HEAD; counts are skipped for an empty diff."""
        diff = self.get_diff(tag)
        if not diff:
            return ReleaseChanges(tag=tag)
        # Without --no-renames a moved file is reported as `dir/{old => new}`
        numstat = self._run_git('diff', '--numstat', '--no-renames', f'{tag}..HEAD')
        return ReleaseChanges(tag=tag, files=parse_numstat(numstat), diff=diff)
