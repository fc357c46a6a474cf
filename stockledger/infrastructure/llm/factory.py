"""
LLM provider factory.

Creates the provider selected in settings, or none when LLM features are
switched off.
"""

from stockledger.config import get_logger, get_settings
from stockledger.core.exceptions import ConfigurationError
from stockledger.core.interfaces import HealthStatus, ILLMProvider

logger = get_logger(__name__)


def get_llm_provider(provider_type: str | None = None) -> ILLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_type: Provider name (default from settings)

    Raises:
        ConfigurationError: Unknown provider
    """
    provider_type = provider_type or get_settings().llm.provider

    if provider_type == "ollama":
        from stockledger.infrastructure.llm.ollama import get_ollama_provider

        return get_ollama_provider()

    raise ConfigurationError(f"Unknown LLM provider: {provider_type}")


def get_optional_llm_provider() -> ILLMProvider | None:
    """The configured provider, or None when LLM_ENABLED is false."""
    if not get_settings().llm.enabled:
        logger.info("llm_disabled")
        return None
    return get_llm_provider()


async def check_llm_health() -> HealthStatus:
    """Health of the configured provider, reported as unavailable when disabled."""
    settings = get_settings()
    if not settings.llm.enabled:
        return HealthStatus(
            available=False,
            provider=settings.llm.provider,
            error="LLM features disabled",
        )
    return await get_llm_provider().check_health()
