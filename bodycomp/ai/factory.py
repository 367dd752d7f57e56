from typing import ClassVar

from bodycomp.ai.client_base import BaseChatClient
from bodycomp.ai.example_client_adapter import ExampleChatClient
from bodycomp.ai.openai_client_adapter import OpenAIChatClient
from bodycomp.config.settings import Settings


class ChatClientFactory:
    """Creates the configured chat client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseChatClient:
        """Create a chat client for settings.ai_provider.

        Raises:
            ValueError: for an unknown provider or a missing compatible base URL.
        """
        provider = settings.ai_provider.lower()
        if provider == "example":
            return ExampleChatClient()
        return OpenAIChatClient(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.ai_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "ai_openai_compatible_base_url is required for ai_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        raise ValueError(
            f"Unknown AI provider '{provider}'. Choose from: {cls.supported_providers()}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.ai_openai_api_key,
            "openai_compatible": settings.ai_openai_compatible_api_key,
            "openrouter": settings.ai_openrouter_api_key,
            "groq": settings.ai_groq_api_key,
            "together": settings.ai_together_api_key,
            "deepseek": settings.ai_deepseek_api_key,
            "ollama": settings.ai_ollama_api_key,
        }
        return key_map.get(provider, "")
