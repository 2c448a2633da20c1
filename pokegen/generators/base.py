"""Text generator contract used for personalities and chat."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Sequence

from ..domain.exceptions import PokeGenError

ChatRole = Literal["user", "model"]


class GeneratorFailure(PokeGenError):
    """Raised when the text generator cannot produce output."""


@dataclass(slots=True, frozen=True)
class ChatTurn:
    role: ChatRole
    text: str


class TextGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        history: Sequence[ChatTurn] = (),
    ) -> str:
        ...
