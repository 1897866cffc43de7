"""Prompt Construction Package"""

from aichangelog.prompts.builder import PromptBuilder, PromptConfig

__all__ = ["PromptBuilder", "PromptConfig"]
