"""Claude (Anthropic) LLM Client"""

import os

from aichangelog.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT


class ClaudeClient(LLMClient):
    """Claude API client. Requires ANTHROPIC_API_KEY env var."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    DEFAULT_TIMEOUT = 120
    MAX_TOKENS = 2000
    TEMPERATURE = 0.3

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: int | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        if not self.api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        try:
            from anthropic import Anthropic
            self._client = Anthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, APITimeoutError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except AuthenticationError:
            raise LLMError("Invalid API key. Check your ANTHROPIC_API_KEY.")
        except APITimeoutError:
            raise LLMError(f"Claude request timed out after {self.timeout}s. Increase with AICHANGELOG_TIMEOUT.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        try:
            content = next((block.text for block in response.content if block.type == "text"), "")
            tokens_used = response.usage.input_tokens + response.usage.output_tokens
        except (AttributeError, TypeError) as e:
            raise LLMError(f"Malformed response from Claude: {e}")
        return self._checked_response(content, tokens_used=tokens_used)
