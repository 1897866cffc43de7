"""
Unit tests for core modules: versioning, changelog document,
PromptBuilder, Config.

Run with:
    pytest tests/test_core.py -v
"""

import json
from datetime import date

import pytest

from aichangelog.changelog import (
    ChangelogFile, ReleaseTrigger, SemVer, VersionError, format_entry, next_version, prepend_entry,
)
from aichangelog.config import Config, ConfigManager
from aichangelog.git.analyzer import FileChange, ReleaseChanges
from aichangelog.prompts.builder import PromptBuilder, PromptConfig


# ---------------------------------------------------------------------------
# Version resolution
# ---------------------------------------------------------------------------

class TestSemVerParse:

    @pytest.mark.parametrize("tag, expected", [
        ("v1.2.3", SemVer(1, 2, 3)),
        ("v0.0.0", SemVer(0, 0, 0)),
        ("v10.20.30", SemVer(10, 20, 30)),
        ("2.4.9", SemVer(2, 4, 9)),
        ("v1.2.3\n", SemVer(1, 2, 3)),
    ])
    def test_valid_tags(self, tag, expected):
        assert SemVer.parse(tag) == expected

    @pytest.mark.parametrize("tag", [
        "release-1",
        "v1.2",
        "v1.2.3.4",
        "v1.2.3-beta.1",
        "v1.2.x",
        "vv1.2.3",
        "",
    ])
    def test_malformed_tags_rejected(self, tag):
        with pytest.raises(VersionError):
            SemVer.parse(tag)

    def test_to_tag_has_v_prefix(self):
        assert SemVer(3, 0, 1).to_tag() == "v3.0.1"
        assert str(SemVer(3, 0, 1)) == "v3.0.1"


class TestBump:

    @pytest.mark.parametrize("tag, signal, expected", [
        ("v2.4.9", "release:major", "v3.0.0"),
        ("v2.4.9", "release:minor", "v2.5.0"),
        ("v2.4.9", "release:patch", "v2.4.10"),
        ("v2.4.9", "release", "v2.4.10"),
        ("v2.4.9", "test", "v2.4.10"),
        ("v2.4.9", None, "v2.4.10"),
        ("v0.0.0", "release:major", "v1.0.0"),
        ("v0.9.0", "release:minor", "v0.10.0"),
    ])
    def test_bump_table(self, tag, signal, expected):
        trigger = ReleaseTrigger.from_signal(signal)
        assert next_version(tag, trigger).to_tag() == expected

    def test_major_resets_minor_and_patch(self):
        assert SemVer(1, 7, 3).bump(ReleaseTrigger.MAJOR) == SemVer(2, 0, 0)

    def test_minor_resets_patch(self):
        assert SemVer(1, 7, 3).bump(ReleaseTrigger.MINOR) == SemVer(1, 8, 0)


class TestReleaseTrigger:

    @pytest.mark.parametrize("signal, expected", [
        ("release:major", ReleaseTrigger.MAJOR),
        ("release:minor", ReleaseTrigger.MINOR),
        ("major", ReleaseTrigger.MAJOR),
        ("MINOR", ReleaseTrigger.MINOR),
        ("patch", ReleaseTrigger.PATCH),
        ("release:premajor", ReleaseTrigger.PATCH),
        ("", ReleaseTrigger.PATCH),
        (None, ReleaseTrigger.PATCH),
    ])
    def test_from_signal(self, signal, expected):
        assert ReleaseTrigger.from_signal(signal) is expected


# ---------------------------------------------------------------------------
# Changelog document
# ---------------------------------------------------------------------------

class TestFormatEntry:

    def test_header_blank_line_then_summary(self):
        entry = format_entry(SemVer(1, 3, 0), date(2026, 10, 19), "### Features\n- add --dry-run")
        lines = entry.split("\n")
        assert lines[0] == "## v1.3.0 (2026-10-19)"
        assert lines[1] == ""
        assert "\n".join(lines[2:]) == "### Features\n- add --dry-run"

    def test_summary_kept_verbatim(self):
        summary = "  - odd   spacing\n\n\n- kept"
        entry = format_entry(SemVer(0, 1, 0), date(2024, 1, 5), summary)
        assert entry.endswith(summary)
        assert "(2024-01-05)" in entry


class TestPrepend:

    def test_new_entry_first_then_old(self):
        assert prepend_entry("E", "OLD") == "E\n\nOLD"

    def test_empty_existing(self):
        assert prepend_entry("E", "") == "E\n\n"


class TestChangelogFile:

    def test_missing_file_reads_empty(self, tmp_path):
        assert ChangelogFile(tmp_path / "CHANGELOG.md").read() == ""

    def test_prepend_creates_file(self, tmp_path):
        path = tmp_path / "CHANGELOG.md"
        ChangelogFile(path).prepend("## v0.1.1 (2026-10-19)\n\n- first")
        assert path.read_text(encoding="utf-8") == "## v0.1.1 (2026-10-19)\n\n- first\n\n"

    def test_prepend_preserves_old_bytes(self, tmp_path):
        path = tmp_path / "CHANGELOG.md"
        old = "## v0.1.0 (2026-01-01)\r\n\r\n- initial\r\né\n"
        path.write_bytes(old.encode("utf-8"))

        ChangelogFile(path).prepend("## v0.1.1 (2026-10-19)\n\n- next")

        data = path.read_bytes()
        assert data.endswith(old.encode("utf-8"))
        assert data.startswith(b"## v0.1.1 (2026-10-19)\n\n- next\n\n")


# ---------------------------------------------------------------------------
# PromptBuilder
# ---------------------------------------------------------------------------

class TestPromptBuilder:

    @pytest.fixture
    def builder(self):
        return PromptBuilder()

    @pytest.fixture
    def diff(self):
        return "diff --git a/src/app.py b/src/app.py\n+added line"

    def test_contains_role(self, builder, diff):
        assert "You are an AI changelog generator." in builder.build(diff)

    @pytest.mark.parametrize("section", ["Features", "Bug Fixes", "Refactors", "Performance", "Chores"])
    def test_lists_every_section(self, builder, diff, section):
        assert section in builder.build(diff)

    def test_style_rules(self, builder, diff):
        result = builder.build(diff)
        assert "avoid marketing language" in result.lower()
        assert "markdown" in result
        assert "bullet points" in result

    def test_diff_comes_last(self, builder, diff):
        assert builder.build(diff).endswith(diff)

    def test_version_in_diff_heading(self, builder, diff):
        result = builder.build(diff, PromptConfig(version="v2.5.0"))
        assert "Diff for v2.5.0:" in result

    def test_hint_included_when_provided(self, builder, diff):
        result = builder.build(diff, PromptConfig(hint="drops Python 3.9 support"))
        assert "drops Python 3.9 support" in result

    def test_hint_excluded_when_none(self, builder, diff):
        assert "developer provided" not in builder.build(diff, PromptConfig(hint=None))


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.provider == "auto"
        assert config.changelog_path == "CHANGELOG.md"
        assert config.trigger_env == "npm_lifecycle_event"
        assert config.timeout is None

    def test_to_dict_excludes_none(self):
        d = Config().to_dict()
        assert "model" not in d
        assert "timeout" not in d
        assert "provider" in d

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"provider": "gemini", "unknown_key": "value"})
        assert config.provider == "gemini"
        assert not hasattr(config, "unknown_key")

    def test_validate_invalid_provider(self):
        config = Config(provider="gpt4")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.provider == "auto"

    def test_validate_invalid_timeout(self):
        config = Config(timeout=-5)
        warnings = config.validate()
        assert any("timeout" in w for w in warnings)
        assert config.timeout is None

    def test_validate_empty_changelog_path(self):
        config = Config(changelog_path="  ")
        config.validate()
        assert config.changelog_path == "CHANGELOG.md"

    def test_validate_valid_config_no_warnings(self):
        assert Config(timeout=30).validate() == []

    @pytest.mark.parametrize("timeout", [True, False, "30", 2.5, 0])
    def test_validate_rejects_non_integer_timeout(self, timeout):
        config = Config(timeout=timeout)
        warnings = config.validate()
        assert warnings == [f"Invalid timeout {timeout!r}, using provider default"]
        assert config.timeout is None

    @pytest.mark.parametrize("field, value", [
        ("provider", ["gemini"]),
        ("model", 7),
        ("trigger_env", False),
        ("changelog_path", None),
    ])
    def test_validate_rejects_wrong_types(self, field, value):
        config = Config(**{field: value})
        assert len(config.validate()) == 1
        assert getattr(config, field) == getattr(Config(), field)

    def test_unknown_keys_dropped_and_bool_timeout_rejected(self, capsys):
        config = Config.from_dict({"dry_run": "false", "timeout": True})
        assert not hasattr(config, "dry_run")
        assert config.timeout is None
        assert "Invalid timeout True" in capsys.readouterr().err

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"provider": "invalid"})
        assert "Config warning" in capsys.readouterr().err


class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        config = ConfigManager().load()
        assert config.provider == "auto"

    def test_load_reads_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".aichangelogrc").write_text(json.dumps({"provider": "claude", "changelog_path": "HISTORY.md"}))

        manager = ConfigManager()
        config = manager.load()
        assert config.provider == "claude"
        assert config.changelog_path == "HISTORY.md"
        assert manager.get_config_path() == tmp_path / ".aichangelogrc"

    def test_save_and_load_roundtrip(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)

        ConfigManager().save(Config(provider="ollama", trigger_env="RELEASE_KIND"), global_config=True)

        loaded = ConfigManager().load()
        assert loaded.provider == "ollama"
        assert loaded.trigger_env == "RELEASE_KIND"

    def test_malformed_json_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".aichangelogrc").write_text("not valid json {{{")

        config = ConfigManager().load()
        assert config.provider == "auto"

    def test_non_object_json_returns_defaults(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".aichangelogrc").write_text('["claude"]')

        config = ConfigManager().load()
        assert config.provider == "auto"
        assert "expected a JSON object" in capsys.readouterr().err

    def test_local_file_wins_over_home(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: home)
        (home / ".aichangelogrc").write_text(json.dumps({"provider": "ollama"}))
        (tmp_path / ".aichangelogrc").write_text(json.dumps({"provider": "gemini"}))

        assert ConfigManager().load().provider == "gemini"


# ---------------------------------------------------------------------------
# FileChange / ReleaseChanges
# ---------------------------------------------------------------------------

class TestFileChange:

    def test_total_changes(self):
        assert FileChange(path="src/app.py", additions=10, deletions=3).total_changes == 13


class TestReleaseChanges:

    def test_empty_diff_is_empty(self):
        assert ReleaseChanges(tag="v1.0.0").is_empty

    def test_totals(self):
        changes = ReleaseChanges(
            tag="v1.0.0",
            files=[FileChange("a.py", 3, 1), FileChange("b.py", 2, 0)],
            diff="diff --git a/a.py b/a.py",
        )
        assert not changes.is_empty
        assert changes.total_files == 2
        assert changes.total_additions == 5
        assert changes.total_deletions == 1
