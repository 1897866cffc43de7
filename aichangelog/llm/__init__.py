"""LLM Client Package"""

from aichangelog.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, validate_summary
from aichangelog.llm.claude import ClaudeClient
from aichangelog.llm.gemini import GeminiClient
from aichangelog.llm.ollama import OllamaClient

PROVIDERS = {
    "gemini": GeminiClient,
    "claude": ClaudeClient,
    "ollama": OllamaClient,
}

AUTO_DETECT_ORDER = [GeminiClient, ClaudeClient, OllamaClient]


def get_client(provider: str = "auto", model: str | None = None, timeout: int | None = None) -> LLMClient:
    """Get an LLM client. Provider can be 'gemini', 'claude', 'ollama', or 'auto'."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](model=model, timeout=timeout)

    if provider == "auto":
        for client_class in AUTO_DETECT_ORDER:
            try:
                return client_class(model=model, timeout=timeout)
            except LLMError:
                continue

        raise LLMError(
            "No LLM provider available.\n\n"
            "Option 1 - Use Gemini API:\n"
            "  export GEMINI_API_KEY='your-key-here'\n\n"
            "Option 2 - Use Claude API:\n"
            "  export ANTHROPIC_API_KEY='your-key-here'\n\n"
            "Option 3 - Use Ollama (free, local):\n"
            "  1. Install: https://ollama.ai\n"
            "  2. Start: ollama serve\n"
            "  3. Pull: ollama pull mistral:7b"
        )

    raise LLMError(f"Unknown provider: {provider}. Use 'gemini', 'claude', 'ollama', or 'auto'.")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "GeminiClient",
    "ClaudeClient",
    "OllamaClient",
    "get_client",
    "PROVIDERS",
    "SYSTEM_PROMPT",
    "validate_summary",
]
