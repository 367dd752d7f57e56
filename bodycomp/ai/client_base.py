from abc import ABC, abstractmethod


class BaseChatClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        image_url: str | None = None,
        json_mode: bool = False,
    ) -> str:
        """Return the provider reply as plain text.

        Args:
            image_url: Optional image (http(s) or data: URL) sent alongside the user prompt.
            json_mode: Ask the provider for a JSON object reply. The reply is not
                guaranteed to be valid JSON.

        Raises:
            AIClientNetworkError: on transport or provider API failures.
            AIClientError: when the reply has no usable content.
        """
