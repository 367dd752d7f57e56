from collections.abc import Generator
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from bodycomp.ai.exceptions import AIClientError, AIClientNetworkError
from bodycomp.ai.openai_client_adapter import OpenAIChatClient


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture()
def sdk_client() -> Generator[MagicMock, None, None]:
    mock_client = MagicMock()
    with patch(
        "bodycomp.ai.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        yield mock_client


def _client() -> OpenAIChatClient:
    return OpenAIChatClient(api_key="k", timeout_seconds=30, base_url=None)


def _call(client: OpenAIChatClient, **kwargs: object) -> str:
    return client.create_chat_completion(
        model="m",
        temperature=0.1,
        system_prompt="system",
        user_prompt="user",
        **kwargs,  # type: ignore[arg-type]
    )


class TestOpenAIChatClient:
    def test_returns_content(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.return_value = _make_mock_response("hello")
        assert _call(_client()) == "hello"

    def test_text_only_request(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.return_value = _make_mock_response("ok")
        _call(_client())
        kwargs = sdk_client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][1] == {"role": "user", "content": "user"}
        assert "response_format" not in kwargs

    def test_image_request_is_multipart(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.return_value = _make_mock_response("{}")
        _call(_client(), image_url="data:image/png;base64,AAAA", json_mode=True)
        kwargs = sdk_client.chat.completions.create.call_args.kwargs
        content = kwargs["messages"][1]["content"]
        assert content[0] == {"type": "text", "text": "user"}
        assert content[1]["image_url"]["url"] == "data:image/png;base64,AAAA"
        assert kwargs["response_format"] == {"type": "json_object"}

    def test_raises_error_for_empty_content(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(AIClientError, match="empty response"):
            _call(_client())

    def test_raises_error_for_no_choices(self, sdk_client: MagicMock) -> None:
        response = MagicMock()
        response.choices = []
        sdk_client.chat.completions.create.return_value = response
        with pytest.raises(AIClientError, match="no choices"):
            _call(_client())

    def test_raises_network_error_on_connection_failure(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(AIClientNetworkError, match="network error"):
            _call(_client())

    def test_raises_network_error_on_timeout(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        with pytest.raises(AIClientNetworkError, match="network error"):
            _call(_client())

    def test_raises_network_error_on_api_error(self, sdk_client: MagicMock) -> None:
        sdk_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        with pytest.raises(AIClientNetworkError, match="API error"):
            _call(_client())
