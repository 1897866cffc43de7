"""Prompt Builder - Construct LLM prompts for changelog generation."""

from dataclasses import dataclass

from aichangelog import CHANGELOG_SECTIONS


@dataclass
class PromptConfig:
    """User-provided context that shapes the prompt."""
    hint: str | None = None
    version: str | None = None


class PromptBuilder:
    """Constructs the changelog prompt: fixed instructions followed by the diff."""

    def build(self, diff: str, config: PromptConfig | None = None) -> str:
        config = config or PromptConfig()
        sections = [
            self._build_role_section(),
            self._build_format_section(),
            self._build_hints_section(config),
            self._build_diff_section(diff, config),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_role_section(self) -> str:
        return """You are an AI changelog generator.
Analyze the following git diff and summarize the changes for developers."""

    def _build_format_section(self) -> str:
        section_names = ", ".join(CHANGELOG_SECTIONS)
        section_list = "\n".join(f"  - {name}: {desc}" for name, desc in CHANGELOG_SECTIONS.items())
        return f"""Use sections ({section_names}).
{section_list}
Omit a section when nothing in the diff belongs to it.
Be concise, technical, and clear. Avoid marketing language.
Write in plain markdown with short bullet points.
Do not add a version heading or a preamble; start directly with the first section."""

    def _build_hints_section(self, config: PromptConfig) -> str:
        if not config.hint:
            return ""

        return f"""The developer provided this context about the release:
"{config.hint}"

Use this to inform the summary, but verify it matches what you see in the diff."""

    def _build_diff_section(self, diff: str, config: PromptConfig) -> str:
        heading = f"Diff for {config.version}:" if config.version else "Diff:"
        return f"{heading}\n{diff}"
