"""Gemini (Google) LLM Client"""

import os

from aichangelog.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT


class GeminiClient(LLMClient):
    """Gemini API client. Requires GEMINI_API_KEY env var."""

    DEFAULT_MODEL = "gemini-1.5-flash"
    DEFAULT_TIMEOUT = 120
    TEMPERATURE = 0.3

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: int | None = None):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        if not self.api_key:
            raise LLMError(
                "No API key found. Set GEMINI_API_KEY environment variable:\n"
                "  export GEMINI_API_KEY='your-key-here'"
            )

        try:
            from google import genai
            from google.genai import types
        except ImportError:
            raise LLMError(
                "Google GenAI SDK not installed. Run:\n"
                "  pip install google-genai"
            )

        # HttpOptions.timeout is in milliseconds
        self._client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=self.timeout * 1000),
        )
        self._config = types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            temperature=self.TEMPERATURE,
        )

    @property
    def name(self) -> str:
        return f"Gemini ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        import httpx
        from google.genai import errors

        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._config,
            )
        except errors.ClientError as e:
            if e.code in (401, 403) or 'API_KEY' in str(e.message):
                raise LLMError("Invalid API key. Check your GEMINI_API_KEY.")
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found for this API key.")
            if e.code == 429:
                raise LLMError("Gemini quota exceeded. Try again later or switch provider with -p.")
            raise LLMError(f"Gemini API error ({e.code}): {e.message}")
        except errors.APIError as e:
            raise LLMError(f"Gemini API error ({e.code}): {e.message}")
        except httpx.TimeoutException:
            raise LLMError(f"Gemini request timed out after {self.timeout}s. Increase with AICHANGELOG_TIMEOUT.")
        except httpx.HTTPError as e:
            raise LLMError(f"Gemini request failed: {e}")
        except (ValueError, AttributeError) as e:
            # pydantic ValidationError and JSONDecodeError are ValueErrors
            raise LLMError(f"Malformed response from Gemini: {e}")

        try:
            content = response.text or ""
            usage = response.usage_metadata
            tokens_used = (usage.total_token_count or 0) if usage else 0
        except (ValueError, AttributeError) as e:
            raise LLMError(f"Malformed response from Gemini: {e}")
        return self._checked_response(content, tokens_used=tokens_used)
