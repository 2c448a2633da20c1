from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock

from pokegen.generators import AnthropicTextGenerator, ChatTurn, GeneratorFailure


def mock_client(*, response=None, error=None):
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response, side_effect=error)
    return client


@pytest.mark.asyncio()
async def test_generate_maps_history_and_joins_text():
    response = SimpleNamespace(
        content=[
            TextBlock(type="text", text=" Pika! "),
            TextBlock(type="text", text="(Hi!) "),
        ]
    )
    client = mock_client(response=response)
    generator = AnthropicTextGenerator("", model="test-model", max_tokens=64, client=client)

    reply = await generator.generate(
        "how are you?",
        system="You are a pikachu.",
        history=[ChatTurn(role="user", text="hi"), ChatTurn(role="model", text="Pika!")],
    )

    assert reply == "Pika! (Hi!)"
    client.messages.create.assert_awaited_once_with(
        model="test-model",
        max_tokens=64,
        messages=[
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "Pika!"},
            {"role": "user", "content": "how are you?"},
        ],
        system="You are a pikachu.",
    )


@pytest.mark.asyncio()
async def test_api_errors_become_generator_failures():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    client = mock_client(error=anthropic.APIConnectionError(request=request))
    generator = AnthropicTextGenerator("key", client=client)

    with pytest.raises(GeneratorFailure):
        await generator.generate("describe yourself")


def test_missing_api_key_is_rejected():
    with pytest.raises(ValueError):
        AnthropicTextGenerator("")
