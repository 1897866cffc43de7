"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from aichangelog import CHANGELOG_SECTION_NAMES


SYSTEM_PROMPT = f"""You are a release engineer who writes changelogs for other developers.

Your standards:
- Group changes under these headings, in this order: {', '.join(CHANGELOG_SECTION_NAMES)}
- One short bullet per change, naming the affected module, command or API
- Describe what changed for someone upgrading, not how the diff looks
- No marketing language, no filler, no closing remarks"""


def validate_summary(content) -> tuple[bool, str]:
    """Validate that a response is usable as a changelog body."""
    if not isinstance(content, str):
        return False, f"Expected text, got {type(content).__name__}"
    if not content.strip():
        return False, "Empty response"
    return True, ""


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients. One request per generate() call, no retries."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def _checked_response(self, content, tokens_used: int = 0) -> LLMResponse:
        """Reject empty output; usable text is returned exactly as the model wrote it."""
        is_valid, error = validate_summary(content)
        if not is_valid:
            raise LLMError(f"{self.name} returned an unusable response: {error}")
        return LLMResponse(content=content, model=getattr(self, 'model', ''), tokens_used=tokens_used)
