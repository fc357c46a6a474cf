"""
Ollama LLM provider.

Text generation over the Ollama HTTP API, optionally constrained to JSON
output for the suggestion prompts.
"""

import time
from typing import Any

import httpx

from stockledger.config import get_logger, get_settings
from stockledger.core.exceptions import (
    LLMResponseError,
    LLMUnavailableError,
    ModelNotFoundError,
)
from stockledger.core.interfaces import HealthStatus, LLMResponse
from stockledger.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)


class OllamaProvider(BaseLLMProvider):
    """Ollama HTTP API provider."""

    provider_name = "ollama"

    def __init__(self) -> None:
        super().__init__()
        llm = get_settings().llm
        self.host = llm.host.rstrip("/")
        self.model = llm.model_name
        self.max_tokens = llm.max_tokens
        self.temperature = llm.temperature

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to the Ollama API, mapping transport errors for the retry layer."""
        url = f"{self.host}/{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout + 5) as client:
                response = await client.post(url, json=payload, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e)) from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Cannot reach Ollama at {self.host}: {e}") from e

        if response.status_code == 404:
            raise ModelNotFoundError(payload.get("model", "unknown"), "ollama")
        if response.status_code != 200:
            raise LLMUnavailableError("ollama", f"HTTP {response.status_code}: {response.text[:200]}")

        return response.json()

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature if temperature is not None else self.temperature,
                "num_predict": max_tokens or self.max_tokens,
            },
        }
        if system_prompt:
            payload["system"] = system_prompt
        if json_mode:
            payload["format"] = "json"

        async def _do_generate() -> LLMResponse:
            start_time = time.time()
            result = await self._post("api/generate", payload)
            elapsed = time.time() - start_time

            text = result.get("response", "")
            if not text.strip():
                raise LLMResponseError(
                    f"Empty response (done_reason={result.get('done_reason')})",
                    text,
                )

            logger.info(
                "ollama_generate",
                model=self.model,
                json_mode=json_mode,
                prompt_len=len(prompt),
                response_len=len(text),
                elapsed_ms=int(elapsed * 1000),
            )
            return LLMResponse(
                text=text,
                model=result.get("model", self.model),
                done=result.get("done", True),
                done_reason=result.get("done_reason"),
                prompt_tokens=result.get("prompt_eval_count", 0),
                completion_tokens=result.get("eval_count", 0),
                total_tokens=result.get("prompt_eval_count", 0) + result.get("eval_count", 0),
            )

        return await self._with_resilience(_do_generate)

    async def check_health(self) -> HealthStatus:
        """Check that Ollama is reachable and the model is pulled."""
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.get(f"{self.host}/api/tags")
        except httpx.HTTPError as e:
            return self._update_health_cache(
                HealthStatus(
                    available=False,
                    provider="ollama",
                    model=self.model,
                    error=f"Cannot connect to Ollama at {self.host}: {e}",
                )
            )

        if response.status_code != 200:
            return self._update_health_cache(
                HealthStatus(
                    available=False,
                    provider="ollama",
                    model=self.model,
                    error=f"HTTP {response.status_code}",
                )
            )

        models = [m.get("name", "") for m in response.json().get("models", [])]
        if not any(self.model == m or self.model in m for m in models):
            return self._update_health_cache(
                HealthStatus(
                    available=False,
                    provider="ollama",
                    model=self.model,
                    error=f"Model '{self.model}' not installed. Run: ollama pull {self.model}",
                )
            )

        return self._update_health_cache(
            HealthStatus(
                available=True,
                provider="ollama",
                model=self.model,
                response_time_ms=(time.time() - start_time) * 1000,
            )
        )


_ollama_provider: OllamaProvider | None = None


def get_ollama_provider() -> OllamaProvider:
    """Get or create the Ollama provider singleton."""
    global _ollama_provider
    if _ollama_provider is None:
        _ollama_provider = OllamaProvider()
    return _ollama_provider


def reset_ollama_provider() -> None:
    global _ollama_provider
    _ollama_provider = None
