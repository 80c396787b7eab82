from typing import Any

from .base import LLMProvider
from .providers import GeminiProvider

_GEMINI_ALIASES = ("gemini", "google")


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Build the reply service named by ``provider``.

    Args:
        provider: 'gemini' (or its alias 'google'), case-insensitive
        **config: Passed to the provider. Gemini needs ``api_key`` and
            accepts ``model`` (default 'gemini-2.0-flash').

    Raises:
        ValueError: Unknown provider name
        TypeError: Required configuration is missing

    Example:
        >>> llm = create_llm_provider("gemini", api_key="...")
    """
    if provider.lower() in _GEMINI_ALIASES:
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: {', '.join(_GEMINI_ALIASES)}"
    )
