"""
AI Changelog

AI-powered CHANGELOG entries from the git diff since the last release tag.
"""

__version__ = "1.0.0"

# Centralized changelog sections - single source of truth
# Used by: prompts/builder.py (format section), llm/base.py (system prompt)
CHANGELOG_SECTIONS = {
    'Features': 'New capabilities or user-visible behavior',
    'Bug Fixes': 'Corrections to existing behavior',
    'Refactors': 'Code restructuring without behavior change',
    'Performance': 'Speed or resource usage improvements',
    'Chores': 'Maintenance, dependencies, tooling, CI',
}

CHANGELOG_SECTION_NAMES = list(CHANGELOG_SECTIONS.keys())

DEFAULT_CHANGELOG_PATH = "CHANGELOG.md"
