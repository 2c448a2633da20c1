"""Anthropic-backed text generator."""

from __future__ import annotations

from typing import Any, Sequence

import anthropic
from anthropic.types import MessageParam, TextBlock

from .base import ChatTurn, GeneratorFailure


class AnthropicTextGenerator:
    """Generate free text through the Messages API."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "claude-3-5-haiku-latest",
        max_tokens: int = 256,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        if not api_key and client is None:
            raise ValueError("Anthropic API key not configured")
        self._client = client or anthropic.AsyncAnthropic(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        history: Sequence[ChatTurn] = (),
    ) -> str:
        messages: list[MessageParam] = [
            {"role": "user" if turn.role == "user" else "assistant", "content": turn.text}
            for turn in history
        ]
        messages.append({"role": "user", "content": prompt})

        params: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "messages": messages,
        }
        if system:
            params["system"] = system

        try:
            response = await self._client.messages.create(**params)
        except anthropic.APIError as exc:
            raise GeneratorFailure(f"Text generation failed: {exc}") from exc

        return "".join(
            block.text for block in response.content if isinstance(block, TextBlock)
        ).strip()
