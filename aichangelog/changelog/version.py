"""Release Version - Parse the last tag and compute the next one."""

import re
from dataclasses import dataclass
from enum import Enum


TAG_PATTERN = re.compile(r'^v?(\d+)\.(\d+)\.(\d+)$')

# Environment variable set by `npm run <script>`; the release scripts are
# named release:major / release:minor / release:patch.
DEFAULT_TRIGGER_ENV = "npm_lifecycle_event"


class VersionError(Exception):
    """Raised when a tag is not a vMAJOR.MINOR.PATCH version."""
    pass


class ReleaseTrigger(Enum):
    """Which version component a release bumps."""
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def from_signal(cls, signal: str | None) -> 'ReleaseTrigger':
        """Map a lifecycle event or bump name to a trigger.

        Accepts 'release:major' style lifecycle events as well as bare
        'major'/'minor'/'patch'. Anything else is a patch release.
        """
        if not signal:
            return cls.PATCH
        name = signal.strip().lower()
        if name.startswith('release:'):
            name = name[len('release:'):]
        for trigger in cls:
            if trigger.value == name:
                return trigger
        return cls.PATCH


@dataclass(frozen=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, tag: str) -> 'SemVer':
        match = TAG_PATTERN.match(tag.strip())
        if not match:
            raise VersionError(f"Tag '{tag}' is not a vMAJOR.MINOR.PATCH version")
        return cls(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    def bump(self, trigger: ReleaseTrigger) -> 'SemVer':
        if trigger is ReleaseTrigger.MAJOR:
            return SemVer(self.major + 1, 0, 0)
        if trigger is ReleaseTrigger.MINOR:
            return SemVer(self.major, self.minor + 1, 0)
        return SemVer(self.major, self.minor, self.patch + 1)

    def to_tag(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.to_tag()


def next_version(last_tag: str, trigger: ReleaseTrigger) -> SemVer:
    """Resolve the version of the release being cut."""
    return SemVer.parse(last_tag).bump(trigger)
