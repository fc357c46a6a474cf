"""LLM infrastructure implementations."""

from stockledger.core.interfaces.llm import ILLMProvider
from stockledger.infrastructure.llm.base import BaseLLMProvider, CircuitBreakerState
from stockledger.infrastructure.llm.factory import (
    check_llm_health,
    get_llm_provider,
    get_optional_llm_provider,
)
from stockledger.infrastructure.llm.ollama import (
    OllamaProvider,
    get_ollama_provider,
    reset_ollama_provider,
)

__all__ = [
    # Interface
    "ILLMProvider",
    # Base
    "BaseLLMProvider",
    "CircuitBreakerState",
    # Ollama
    "OllamaProvider",
    "get_ollama_provider",
    "reset_ollama_provider",
    # Factory
    "get_llm_provider",
    "get_optional_llm_provider",
    "check_llm_health",
]
