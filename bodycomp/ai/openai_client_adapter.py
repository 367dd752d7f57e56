from typing import Any

import httpx
import openai

from bodycomp.ai.client_base import BaseChatClient
from bodycomp.ai.exceptions import AIClientError, AIClientNetworkError


class OpenAIChatClient(BaseChatClient):
    """Chat client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        request: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": self._user_content(user_prompt, image_url)},
            ],
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**request)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AIClientNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AIClientNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AIClientError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AIClientError("AI returned empty response")
        return content

    @staticmethod
    def _user_content(user_prompt: str, image_url: str | None) -> str | list[dict[str, Any]]:
        if image_url is None:
            return user_prompt
        return [
            {"type": "text", "text": user_prompt},
            {"type": "image_url", "image_url": {"url": image_url}},
        ]
