"""Release Note Composer - Turn the diff since the last tag into a CHANGELOG entry.

Flow: last tag -> diff -> next version -> model summary -> prepend to changelog.

Every collaborator failure is returned as a ComposeResult with a ComposeError
instead of raised, so the caller decides how to report it and which exit code
to use. An empty diff is a successful no-op: the model client is never built,
nothing is sent and the changelog is not touched.
"""

import time
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Callable, Literal

from aichangelog.changelog import ChangelogFile, ReleaseTrigger, SemVer, VersionError, format_entry
from aichangelog.git import GitError, ReleaseChanges
from aichangelog.llm import LLMClient, LLMError, LLMResponse
from aichangelog.prompts import PromptBuilder, PromptConfig

ErrorKind = Literal["tag_lookup", "invalid_tag", "diff", "generation", "filesystem"]


def utc_today() -> date:
    """Entry dates are UTC calendar dates."""
    return datetime.now(timezone.utc).date()


class ComposeStatus(Enum):
    WRITTEN = "written"
    DRY_RUN = "dry_run"
    NO_CHANGES = "no_changes"
    FAILED = "failed"


@dataclass(frozen=True)
class ComposeError:
    kind: ErrorKind
    message: str
    hint: str | None = None


@dataclass
class ComposeResult:
    """Outcome of one run. Fields after `status` are filled as far as the run got."""
    status: ComposeStatus
    last_tag: str | None = None
    version: SemVer | None = None
    entry: str | None = None
    changes: ReleaseChanges | None = None
    prompt: str | None = None
    provider: str | None = None
    response: LLMResponse | None = None
    error: ComposeError | None = None
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is not ComposeStatus.FAILED


class ReleaseNoteComposer:
    """Runs one release: resolve version, summarize the diff, prepend the entry.

    The caller owns every collaborator. `client_factory` is only called once
    there is a non-empty diff to summarize.
    """

    def __init__(
        self,
        git,
        client_factory: Callable[[], LLMClient],
        changelog: ChangelogFile,
        *,
        clock: Callable[[], date] = utc_today,
    ):
        self.git = git
        self.client_factory = client_factory
        self.changelog = changelog
        self.clock = clock

    def compose(
        self,
        trigger: ReleaseTrigger,
        prompt_config: PromptConfig | None = None,
        dry_run: bool = False,
    ) -> ComposeResult:
        result = ComposeResult(status=ComposeStatus.FAILED)
        timings = result.timings
        prompt_config = prompt_config or PromptConfig()

        t0 = time.time()
        try:
            result.last_tag = self.git.get_last_tag()
        except GitError as e:
            return self._fail(result, "tag_lookup", str(e), "Create the first release tag, e.g. git tag v0.1.0")

        try:
            result.changes = self.git.get_changes_since(result.last_tag)
        except GitError as e:
            return self._fail(result, "diff", str(e))
        timings['git'] = time.time() - t0

        if result.changes.is_empty:
            result.status = ComposeStatus.NO_CHANGES
            return result

        try:
            result.version = SemVer.parse(result.last_tag).bump(trigger)
        except VersionError as e:
            return self._fail(result, "invalid_tag", str(e), "Release tags must look like v1.2.3")

        prompt_config = replace(prompt_config, version=result.version.to_tag())
        result.prompt = PromptBuilder().build(result.changes.diff, prompt_config)

        t0 = time.time()
        try:
            client = self.client_factory()
            result.provider = client.name
            result.response = client.generate(result.prompt)
        except LLMError as e:
            return self._fail(result, "generation", str(e))
        except Exception as e:
            # SDK or payload errors the client did not translate
            source = result.provider or "model client"
            return self._fail(result, "generation", f"Unexpected error from {source}: {type(e).__name__}: {e}")
        timings['generate'] = time.time() - t0

        result.entry = format_entry(result.version, self.clock(), result.response.content)

        if dry_run:
            result.status = ComposeStatus.DRY_RUN
            return result

        try:
            self.changelog.prepend(result.entry)
        except (OSError, UnicodeError) as e:
            return self._fail(result, "filesystem", f"Could not update {self.changelog.path}: {e}")

        result.status = ComposeStatus.WRITTEN
        return result

    @staticmethod
    def _fail(result: ComposeResult, kind: ErrorKind, message: str, hint: str | None = None) -> ComposeResult:
        result.status = ComposeStatus.FAILED
        result.error = ComposeError(kind=kind, message=message, hint=hint)
        return result


def compose_release_notes(
    git,
    client_factory: Callable[[], LLMClient],
    trigger: ReleaseTrigger,
    changelog: ChangelogFile,
    *,
    prompt_config: PromptConfig | None = None,
    dry_run: bool = False,
    clock: Callable[[], date] = utc_today,
) -> ComposeResult:
    """One-shot helper around ReleaseNoteComposer.compose()."""
    composer = ReleaseNoteComposer(git, client_factory, changelog, clock=clock)
    return composer.compose(trigger, prompt_config=prompt_config, dry_run=dry_run)
