"""Ollama LLM Client for Local Models"""

import http.client
import json
import os
import urllib.error
import urllib.request

from aichangelog.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT

NOT_RUNNING = "Ollama not running. Start with: ollama serve"


class OllamaClient(LLMClient):
    """Talks to a local `ollama serve` over its JSON HTTP API."""

    DEFAULT_MODEL = "mistral:7b"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 300  # CPU inference over a whole release diff is slow
    CONNECT_CHECK_TIMEOUT = 5

    def __init__(self, model: str | None = None, host: str | None = None, timeout: int | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = (host or os.environ.get("OLLAMA_HOST", self.DEFAULT_HOST)).rstrip('/')
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        try:
            self._request("/api/tags", timeout=self.CONNECT_CHECK_TIMEOUT)
        except (OSError, http.client.HTTPException, ValueError):
            raise LLMError(f"{NOT_RUNNING} (nothing answering at {self.host})")

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _request(self, path: str, payload: dict | None = None, timeout: float | None = None):
        """GET (no payload) or POST JSON to the server and decode the JSON reply."""
        data = json.dumps(payload).encode('utf-8') if payload is not None else None
        req = urllib.request.Request(
            f"{self.host}{path}", data=data, headers={"Content-Type": "application/json"}
        )
        with urllib.request.urlopen(req, timeout=timeout or self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def _error_for(self, exc: Exception) -> LLMError:
        if isinstance(exc, urllib.error.HTTPError):
            if exc.code == 404:
                return LLMError(f"Model '{self.model}' not found. Run: ollama pull {self.model}")
            return LLMError(f"Ollama error ({exc.code}): {exc.reason}")
        if isinstance(exc, ValueError):
            return LLMError("Ollama sent a body that is not JSON. Try a different model.")
        if isinstance(exc, http.client.HTTPException):
            return LLMError(f"Incomplete response from Ollama: {exc}. The model may have run out of memory.")

        # URLError wraps the underlying socket error in .reason
        reason = getattr(exc, 'reason', exc)
        if isinstance(reason, TimeoutError):
            return LLMError(f"Ollama request timed out after {self.timeout}s. Increase with AICHANGELOG_TIMEOUT.")
        if isinstance(reason, ConnectionRefusedError):
            return LLMError(NOT_RUNNING)
        return LLMError(f"Ollama request failed: {reason}")

    def generate(self, prompt: str) -> LLMResponse:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "system": SYSTEM_PROMPT,
            "stream": False,
            "options": {"temperature": 0.3, "num_predict": 2000},
        }
        try:
            result = self._request("/api/generate", payload)
        except (OSError, http.client.HTTPException, ValueError) as e:
            raise self._error_for(e) from e

        if not isinstance(result, dict):
            raise LLMError(f"Malformed response from Ollama: expected an object, got {type(result).__name__}")
        return self._checked_response(result.get("response"), tokens_used=result.get("eval_count") or 0)
